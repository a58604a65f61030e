"""
Remote nomenclature loader.

Fetches ENZYME nomenclature text over HTTP(S) with requests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

import requests

from ectree.config import BuildConfig
from ectree.loaders.base import LineLoader, LoaderError, LoaderRegistry

logger = logging.getLogger(__name__)

DEFAULT_ENZCLASS_URL = "https://ftp.expasy.org/databases/enzyme/enzclass.txt"


@LoaderRegistry.register
class RemoteLoader(LineLoader):
    """Load lines from an http:// or https:// URL."""

    LOADER_NAME: ClassVar[str] = "remote"

    def __init__(self, timeout: float = 30.0, encoding: str | None = None) -> None:
        super().__init__()
        self.timeout = timeout
        self.encoding = encoding

    @classmethod
    def can_load(cls, source: str | Path) -> bool:
        return isinstance(source, str) and source.lower().startswith(("http://", "https://"))

    @classmethod
    def from_config(cls, config: BuildConfig) -> RemoteLoader:
        return cls(timeout=config.timeout, encoding=config.encoding)

    def read_lines(self, source: str | Path = DEFAULT_ENZCLASS_URL) -> list[str]:
        """Download ``source`` and return its lines."""
        self._reset_messages()
        url = str(source)
        logger.debug("Fetching %s (timeout %.1fs)", url, self.timeout)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise LoaderError(f"Could not fetch {url}", source=url, details=str(exc)) from exc

        if self.encoding:
            response.encoding = self.encoding
        return response.text.splitlines()
