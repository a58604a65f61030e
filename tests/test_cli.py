"""Tests for the ectree command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ectree.cli import (
    EXIT_DUPLICATE,
    EXIT_FORMAT_ERROR,
    EXIT_LOADER_ERROR,
    EXIT_MISSING_PARENT,
    EXIT_NOT_FOUND,
    EXIT_OK,
    build_parser,
    main,
)


def _run(sample_file: Path, *args: str) -> int:
    return main(["--source", str(sample_file), *args])


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_defaults(self):
        args = build_parser().parse_args(["find", "1.1"])
        assert args.duplicates == "keep_first"
        assert args.ordering == "prefix"
        assert args.allow_wildcards is True
        assert args.source.startswith("https://")


class TestCommands:
    """Tests for each subcommand against a local file."""

    def test_print(self, sample_file, capsys):
        assert _run(sample_file, "print") == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "1: Oxidoreductases."
        assert lines[1] == "\t1.1: Acting on the CH-OH group of donors."

    def test_print_depth_first(self, sample_file, capsys):
        assert _run(sample_file, "print", "--order", "depth") == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("1.1.1:")
        assert lines[-1] == "6: Ligases."

    def test_print_breadth_first(self, sample_file, capsys):
        assert _run(sample_file, "print", "--order", "breadth") == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert lines[:3] == ["1: Oxidoreductases.", "2: Transferases.", "6: Ligases."]

    def test_find(self, sample_file, capsys):
        assert _run(sample_file, "find", "1.1.1") == EXIT_OK
        out = capsys.readouterr().out
        assert "1.1.1: With NAD(+) or NADP(+) as acceptor." in out

    def test_find_json(self, sample_file, capsys):
        assert _run(sample_file, "--json", "find", "6.2.-") == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["ec_number"] == "6.2"

    def test_find_wildcards_disabled(self, sample_file):
        assert _run(sample_file, "--no-wildcards", "find", "6.2.-") == EXIT_FORMAT_ERROR
        assert _run(sample_file, "--no-wildcards", "find", "6.2") == EXIT_OK

    def test_find_not_found(self, sample_file):
        assert _run(sample_file, "find", "9.9") == EXIT_NOT_FOUND

    def test_find_bad_number(self, sample_file):
        assert _run(sample_file, "find", "3.x.5") == EXIT_FORMAT_ERROR

    def test_search(self, sample_file, capsys):
        assert _run(sample_file, "search", "sulfur") == EXIT_OK
        out = capsys.readouterr().out.splitlines()
        assert [line.split(":")[0] for line in out] == ["1.3.7", "1.8", "6.2"]

    def test_search_exact(self, sample_file, capsys):
        assert _run(sample_file, "search", "--exact", "Ligases.") == EXIT_OK
        assert capsys.readouterr().out.strip() == "6: Ligases."

    def test_search_no_match(self, sample_file):
        assert _run(sample_file, "search", "kinase") == EXIT_NOT_FOUND

    def test_depth(self, sample_file, capsys):
        assert _run(sample_file, "depth", "1") == EXIT_OK
        assert len(capsys.readouterr().out.splitlines()) == 3

    def test_check(self, sample_file, capsys):
        assert _run(sample_file, "check") == EXIT_OK
        assert "Gap in numbering" in capsys.readouterr().out


class TestExitCodes:
    """Tests for error-to-exit-status mapping."""

    def test_missing_file(self, tmp_path):
        assert main(["--source", str(tmp_path / "missing.txt"), "print"]) == EXIT_LOADER_ERROR

    def test_strict_missing_parent(self, tmp_path):
        path = tmp_path / "orphan.txt"
        path.write_text("1 Top\n2.1 Orphan\n", encoding="utf-8")
        assert main(["--source", str(path), "--strict", "print"]) == EXIT_MISSING_PARENT

    def test_strict_duplicate(self, tmp_path):
        path = tmp_path / "dup.txt"
        path.write_text("1 Top\n1 Again\n", encoding="utf-8")
        args = ["--source", str(path), "--strict", "--duplicates", "sibling", "print"]
        assert main(args) == EXIT_DUPLICATE
