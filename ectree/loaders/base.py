"""
Base loader class and registry for nomenclature line sources.

A loader turns a source (file path, URL) into decoded text lines. All
loaders register themselves with the LoaderRegistry so a source can be
read without naming a loader.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from ectree.config import BuildConfig


class LoaderError(Exception):
    """Base exception for loader errors."""

    def __init__(self, message: str, source: str | Path | None = None, details: str | None = None):
        self.source = source
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "source": str(self.source) if self.source else None,
            "details": self.details,
        }


class LineLoader(ABC):
    """
    Abstract base class for line loaders.

    Each loader is responsible for:
    1. Deciding if it can handle a source
    2. Reading the source to completion as text lines
    """

    LOADER_NAME: ClassVar[str] = "base"

    def __init__(self) -> None:
        self._warnings: list[str] = []

    @classmethod
    @abstractmethod
    def can_load(cls, source: str | Path) -> bool:
        """Check if this loader can handle the given source."""

    @classmethod
    @abstractmethod
    def from_config(cls, config: BuildConfig) -> LineLoader:
        """Create a loader configured from a BuildConfig."""

    @abstractmethod
    def read_lines(self, source: str | Path) -> list[str]:
        """
        Read every line of the source.

        Returns:
            Lines without trailing newlines

        Raises:
            LoaderError: If reading fails
        """

    @property
    def warnings(self) -> list[str]:
        """Get any warnings from the last read."""
        return self._warnings

    def _add_warning(self, warning: str) -> None:
        self._warnings.append(warning)

    def _reset_messages(self) -> None:
        self._warnings = []


class LoaderRegistry:
    """
    Registry of available line loaders.

    Use this to select the appropriate loader for a source.
    """

    _loaders: ClassVar[list[type[LineLoader]]] = []

    @classmethod
    def register(cls, loader_class: type[LineLoader]) -> type[LineLoader]:
        """
        Register a loader class. Can be used as a decorator.

        @LoaderRegistry.register
        class MyLoader(LineLoader):
            ...
        """
        if loader_class not in cls._loaders:
            cls._loaders.append(loader_class)
        return loader_class

    @classmethod
    def get_loader_class(cls, source: str | Path) -> type[LineLoader] | None:
        """Get the first registered loader class accepting ``source``."""
        for loader_class in cls._loaders:
            if loader_class.can_load(source):
                return loader_class
        return None

    @classmethod
    def get_loader_by_name(cls, name: str) -> type[LineLoader] | None:
        for loader_class in cls._loaders:
            if loader_class.LOADER_NAME == name:
                return loader_class
        return None

    @classmethod
    def read_lines(cls, source: str | Path, config: BuildConfig | None = None) -> list[str]:
        """
        Read lines using the appropriate loader.

        Raises:
            LoaderError: If no loader is available or reading fails
        """
        from ectree.config import BuildConfig

        loader_class = cls.get_loader_class(source)
        if loader_class is None:
            names = ", ".join(loader.LOADER_NAME for loader in cls._loaders)
            raise LoaderError(
                f"No loader available for source: {source}",
                source=source,
                details=f"Registered loaders: {names}",
            )
        return loader_class.from_config(config or BuildConfig()).read_lines(source)
