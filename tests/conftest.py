"""
Pytest configuration and fixtures for ectree tests.
"""

from pathlib import Path

import pytest

from ectree.hierarchy import ECTree, ECTreeBuilder

# Excerpt in the layout of the ExPASy enzclass.txt file, header included.
ENZCLASS_SAMPLE = """\
-----------------------------------------------------------------------------
        ENZYME nomenclature database
        SIB Swiss Institute of Bioinformatics; Geneva, Switzerland
-----------------------------------------------------------------------------

        Description: Definition of enzyme classes, subclasses and
                     sub-subclasses

-----------------------------------------------------------------------------

1. -. -.-  Oxidoreductases.
1. 1. -.-   Acting on the CH-OH group of donors.
1. 1. 1.-    With NAD(+) or NADP(+) as acceptor.
1. 1. 2.-    With a cytochrome as acceptor.
1. 1. 3.-    With oxygen as acceptor.
1. 3. -.-   Acting on the CH-CH group of donors.
1. 3. 7.-    With an iron-sulfur protein as acceptor.
1. 8. -.-   Acting on a sulfur group of donors.
1. 8. 1.-    With NAD(+) or NADP(+) as acceptor.
2. -. -.-  Transferases.
2. 1. -.-   Transferring one-carbon groups.
2. 1. 1.-    Methyltransferases.
6. -. -.-  Ligases.
6. 2. -.-   Forming carbon-sulfur bonds.
6. 2. 1.-    Acid--thiol ligases.

-----------------------------------------------------------------------------
"""


@pytest.fixture
def sample_lines() -> list[str]:
    """Lines of the enzclass excerpt."""
    return ENZCLASS_SAMPLE.splitlines()


@pytest.fixture
def sample_tree(sample_lines: list[str]) -> ECTree:
    """Tree built from the enzclass excerpt."""
    return ECTreeBuilder.build_from_lines(sample_lines)


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """The enzclass excerpt written to disk."""
    path = tmp_path / "enzclass.txt"
    path.write_text(ENZCLASS_SAMPLE, encoding="utf-8")
    return path
