"""Tests for line loaders and source-based builds."""

from __future__ import annotations

from pathlib import Path

import pytest
import requests

from ectree.config import BuildConfig
from ectree.hierarchy.builder import ECTreeBuilder
from ectree.loaders import (
    DEFAULT_ENZCLASS_URL,
    LoaderError,
    LoaderRegistry,
    RemoteLoader,
    TextFileLoader,
)

# ===================================================================
# Helpers
# ===================================================================


class _FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code
        self.encoding = None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get and record the calls made."""
    calls: list[dict] = []

    def install(response: _FakeResponse | Exception):
        def _get(url, timeout=None):
            calls.append({"url": url, "timeout": timeout})
            if isinstance(response, Exception):
                raise response
            return response

        monkeypatch.setattr(requests, "get", _get)
        return calls

    return install


# ===================================================================
# TextFileLoader
# ===================================================================


class TestTextFileLoader:
    """Tests for local files."""

    def test_reads_lines(self, sample_file: Path):
        lines = TextFileLoader().read_lines(sample_file)
        assert "1. -. -.-  Oxidoreductases." in lines
        assert all(not line.endswith("\n") for line in lines)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(LoaderError) as info:
            TextFileLoader().read_lines(tmp_path / "nope.txt")
        assert "not found" in str(info.value)
        assert info.value.to_dict()["source"].endswith("nope.txt")

    def test_fallback_encoding(self, tmp_path: Path):
        path = tmp_path / "latin.txt"
        path.write_bytes("1. -. -.-  Oxidor\xe9ductases.\n".encode("latin-1"))
        loader = TextFileLoader()
        lines = loader.read_lines(path)
        assert lines == ["1. -. -.-  Oxidor\xe9ductases."]
        assert loader.warnings == ["Used fallback encoding: latin-1"]

    def test_can_load(self, sample_file: Path):
        assert TextFileLoader.can_load(sample_file)
        assert TextFileLoader.can_load(str(sample_file))
        assert not TextFileLoader.can_load("https://example.org/enzclass.txt")


# ===================================================================
# RemoteLoader
# ===================================================================


class TestRemoteLoader:
    """Tests for URL sources, with requests.get replaced."""

    def test_reads_lines(self, fake_get):
        calls = fake_get(_FakeResponse("1 A\n1.1 B\n"))
        lines = RemoteLoader(timeout=5.0).read_lines("https://example.org/enzclass.txt")
        assert lines == ["1 A", "1.1 B"]
        assert calls == [{"url": "https://example.org/enzclass.txt", "timeout": 5.0}]

    def test_default_url(self, fake_get):
        calls = fake_get(_FakeResponse(""))
        RemoteLoader().read_lines()
        assert calls[0]["url"] == DEFAULT_ENZCLASS_URL

    def test_http_error(self, fake_get):
        fake_get(_FakeResponse("", status_code=404))
        with pytest.raises(LoaderError) as info:
            RemoteLoader().read_lines("https://example.org/missing.txt")
        assert "404" in info.value.details

    def test_connection_error(self, fake_get):
        fake_get(requests.ConnectionError("unreachable"))
        with pytest.raises(LoaderError):
            RemoteLoader().read_lines("https://example.org/enzclass.txt")

    def test_can_load(self):
        assert RemoteLoader.can_load("https://example.org/x")
        assert RemoteLoader.can_load("HTTP://example.org/x")
        assert not RemoteLoader.can_load("/tmp/enzclass.txt")
        assert not RemoteLoader.can_load(Path("enzclass.txt"))


# ===================================================================
# LoaderRegistry and builder integration
# ===================================================================


class TestLoaderRegistry:
    """Tests for loader selection."""

    def test_selects_by_source(self, sample_file: Path):
        assert LoaderRegistry.get_loader_class(sample_file) is TextFileLoader
        assert LoaderRegistry.get_loader_class("https://example.org/x") is RemoteLoader

    def test_unsupported_scheme(self):
        with pytest.raises(LoaderError) as info:
            LoaderRegistry.read_lines("ftp://ftp.expasy.org/databases/enzyme/enzclass.txt")
        assert "No loader" in str(info.value)

    def test_get_loader_by_name(self):
        assert LoaderRegistry.get_loader_by_name("text") is TextFileLoader
        assert LoaderRegistry.get_loader_by_name("remote") is RemoteLoader
        assert LoaderRegistry.get_loader_by_name("pdf") is None

    def test_build_from_file(self, sample_file: Path):
        tree = ECTreeBuilder.build_from_file(sample_file)
        assert len(tree) == 15

    def test_build_from_source_path(self, sample_file: Path):
        tree = ECTreeBuilder.build_from_source(str(sample_file))
        assert tree.find_by_ec_number("6.2").description == "Forming carbon-sulfur bonds."

    def test_build_from_url(self, fake_get):
        calls = fake_get(_FakeResponse("1 Oxidoreductases\n1.1 Acting on CH-OH\n"))
        tree = ECTreeBuilder.build_from_url(
            "https://example.org/enzclass.txt", BuildConfig(timeout=2.5)
        )
        assert len(tree) == 2
        assert calls[0]["timeout"] == 2.5
