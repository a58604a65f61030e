"""ectree - Enzyme Commission classification as a navigable tree."""

__version__ = "0.1.0"

from ectree.config import BuildConfig, DuplicatePolicy
from ectree.exceptions import DuplicateError, ECTreeError, FormatError, MissingParentError
from ectree.hierarchy import (
    ECNode,
    ECNumber,
    ECTree,
    ECTreeBuilder,
    build_tree,
    parse_ec_number,
)

__all__ = [
    "BuildConfig",
    "DuplicatePolicy",
    "ECNode",
    "ECNumber",
    "ECTree",
    "ECTreeBuilder",
    "build_tree",
    "parse_ec_number",
    "ECTreeError",
    "FormatError",
    "DuplicateError",
    "MissingParentError",
]
