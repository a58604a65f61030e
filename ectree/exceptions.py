"""Exceptions raised by EC tree parsing and insertion."""

from __future__ import annotations

from typing import Any


class ECTreeError(Exception):
    """Base exception for EC tree errors.

    Attributes:
        ec_number: Text of the offending EC number, when one is known.
    """

    def __init__(self, message: str, ec_number: str | None = None) -> None:
        self.ec_number = ec_number
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "type": type(self).__name__,
            "ec_number": self.ec_number,
        }


class FormatError(ECTreeError, ValueError):
    """Raised when text cannot be parsed as an EC number."""


class DuplicateError(ECTreeError):
    """Raised by strict insertion when the EC number is already in the tree."""


class MissingParentError(ECTreeError):
    """Raised by strict insertion when the parent number is not in the tree yet."""
