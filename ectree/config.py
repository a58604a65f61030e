"""
Build configuration for EC trees.

Controls how the builder treats repeated numbers, which ordering is used
for result sets, and how line sources are read.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

ORDERINGS = ("prefix", "legacy")


class DuplicatePolicy(str, Enum):
    """What the builder does with a number that appears more than once."""

    KEEP_FIRST = "keep_first"
    REPLACE = "replace"
    SIBLING = "sibling"


@dataclass
class BuildConfig:
    """Configuration for building an ECTree from nomenclature lines."""

    # Tree construction
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST
    ordering: str = "prefix"  # "prefix" or "legacy", used for result sets
    strict: bool = False  # Insert with validating add() instead of add_fast()

    # Parsing
    allow_wildcards: bool = False  # Accept "1.1.-.-" style placeholders

    # Line sources
    encoding: str = "utf-8"
    timeout: float = 30.0  # Seconds, remote sources only

    def __post_init__(self) -> None:
        self.duplicate_policy = DuplicatePolicy(self.duplicate_policy)
        if self.ordering not in ORDERINGS:
            raise ValueError(
                f"Unknown ordering {self.ordering!r}, expected one of {ORDERINGS}"
            )
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "duplicate_policy": self.duplicate_policy.value,
            "ordering": self.ordering,
            "strict": self.strict,
            "allow_wildcards": self.allow_wildcards,
            "encoding": self.encoding,
            "timeout": self.timeout,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BuildConfig:
        return cls(
            duplicate_policy=data.get("duplicate_policy", DuplicatePolicy.KEEP_FIRST),
            ordering=data.get("ordering", "prefix"),
            strict=data.get("strict", False),
            allow_wildcards=data.get("allow_wildcards", False),
            encoding=data.get("encoding", "utf-8"),
            timeout=data.get("timeout", 30.0),
        )
