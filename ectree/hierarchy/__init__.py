"""
Hierarchy module - the EC number tree.

Numbers, nodes, the tree itself, and the builder that fills it from
nomenclature text.
"""

from ectree.hierarchy.builder import ECTreeBuilder, build_tree
from ectree.hierarchy.numbering import (
    ECNumber,
    NumberingValidator,
    legacy_compare,
    parse_ec_number,
    prefix_compare,
)
from ectree.hierarchy.tree import ECNode, ECTree

__all__ = [
    "ECNumber",
    "ECNode",
    "ECTree",
    "ECTreeBuilder",
    "NumberingValidator",
    "build_tree",
    "legacy_compare",
    "parse_ec_number",
    "prefix_compare",
]
