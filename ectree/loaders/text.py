"""
Local text file loader.

Reads ENZYME nomenclature files such as ``enzclass.txt`` from disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from ectree.config import BuildConfig
from ectree.loaders.base import LineLoader, LoaderError, LoaderRegistry

logger = logging.getLogger(__name__)

FALLBACK_ENCODINGS = ("latin-1", "cp1252")


@LoaderRegistry.register
class TextFileLoader(LineLoader):
    """
    Load lines from a local text file.

    Decodes with the configured encoding, falling back to latin-1 and
    cp1252 when the file is not valid in it.
    """

    LOADER_NAME: ClassVar[str] = "text"

    def __init__(self, encoding: str = "utf-8") -> None:
        super().__init__()
        self.encoding = encoding

    @classmethod
    def can_load(cls, source: str | Path) -> bool:
        return not (isinstance(source, str) and "://" in source)

    @classmethod
    def from_config(cls, config: BuildConfig) -> TextFileLoader:
        return cls(encoding=config.encoding)

    def read_lines(self, source: str | Path) -> list[str]:
        """Read a text file and return its lines."""
        self._reset_messages()
        path = Path(source)
        if not path.exists():
            raise LoaderError(f"File not found: {path}", source=path)

        try:
            return path.read_text(encoding=self.encoding).splitlines()
        except UnicodeDecodeError:
            for encoding in FALLBACK_ENCODINGS:
                try:
                    content = path.read_text(encoding=encoding)
                except UnicodeDecodeError:
                    continue
                self._add_warning(f"Used fallback encoding: {encoding}")
                logger.warning("Read %s with fallback encoding %s", path, encoding)
                return content.splitlines()
            raise LoaderError(
                f"Could not decode file: {path}",
                source=path,
                details=f"Tried {self.encoding}, {', '.join(FALLBACK_ENCODINGS)}",
            ) from None
        except OSError as exc:
            raise LoaderError(f"Could not read file: {path}", source=path, details=str(exc)) from exc
