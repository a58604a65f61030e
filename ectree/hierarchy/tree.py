"""
EC tree data structures.

An ECTree owns a synthetic root node (no EC number, depth 0). Every other
node carries a unique ECNumber and hangs below the node holding its parent
number. Children are kept sorted by EC number, never by insertion time.
"""

from __future__ import annotations

import bisect
import weakref
from collections import Counter, deque
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any

from ectree.exceptions import DuplicateError, ECTreeError, FormatError, MissingParentError
from ectree.hierarchy.numbering import ECNumber, coerce_ec_number, get_comparator


def _sorted_nodes(nodes: Iterable[ECNode], ordering: str) -> list[ECNode]:
    """Sort non-root nodes by EC number using the named ordering."""
    compare = get_comparator(ordering)
    return sorted(
        nodes, key=cmp_to_key(lambda a, b: compare(a.ec_number, b.ec_number))
    )


@dataclass(eq=False)
class ECNode:
    """
    A node of an ECTree.

    Each node has:
    - An EC number (None only for the root)
    - A text description, e.g. "With NAD(+) or NADP(+) as acceptor."
    - Children sorted by EC number
    - A non-owning reference to its parent

    Iterating a node walks its subtree in list order.
    """

    ec_number: ECNumber | None = None
    description: str | None = None
    children: list[ECNode] = field(default_factory=list, repr=False)
    _parent_ref: weakref.ReferenceType[ECNode] | None = field(
        default=None, init=False, repr=False
    )

    def __post_init__(self) -> None:
        if self.ec_number is not None and not isinstance(self.ec_number, ECNumber):
            self.ec_number = coerce_ec_number(self.ec_number)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def parent(self) -> ECNode | None:
        """The node this one hangs below, or None for a root or detached node."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def _set_parent(self, parent: ECNode) -> None:
        self._parent_ref = weakref.ref(parent)

    def _add_child(self, child: ECNode) -> None:
        """Insert ``child`` keeping children sorted; equal numbers go last."""
        bisect.insort_right(self.children, child, key=lambda n: n.ec_number)

    @property
    def is_root(self) -> bool:
        return self.ec_number is None

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    @property
    def depth(self) -> int:
        """Depth in the tree: 0 for the root, else the EC number's depth."""
        if self.ec_number is None:
            return 0
        return self.ec_number.depth

    def ancestors(self) -> list[ECNode]:
        """Return the chain of parents, nearest first, ending at the root."""
        chain = []
        current = self.parent
        while current is not None:
            chain.append(current)
            current = current.parent
        return chain

    @property
    def hierarchy_path(self) -> str:
        """
        Get the chain of descriptions from the top level down to this node.

        Example: "Oxidoreductases. > Acting on the CH-OH group of donors."
        """
        parts = [
            node.description
            for node in [self, *self.ancestors()]
            if not node.is_root and node.description
        ]
        return " > ".join(reversed(parts))

    @property
    def descendant_count(self) -> int:
        """Count all descendants (children, grandchildren, etc.)."""
        count = len(self.children)
        for child in self.children:
            count += child.descendant_count
        return count

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def breadth_first(self) -> list[ECNode]:
        """Level-order listing of this subtree, starting with this node."""
        visited = []
        queue = deque([self])
        while queue:
            current = queue.popleft()
            visited.append(current)
            queue.extend(current.children)
        return visited

    def depth_first(self) -> list[ECNode]:
        """Listing where every node follows its whole subtree.

        Children are visited in EC number order; this node comes last.
        """
        visited: dict[int, ECNode] = {}
        for child in self.children:
            for node in child.depth_first():
                visited.setdefault(id(node), node)
        visited.setdefault(id(self), self)
        return list(visited.values())

    def list_order(self) -> list[ECNode]:
        """
        Pre-order listing of this subtree. For example:

            1, 1.1, 1.1.1, 1.1.2, 1.2, 1.2.1, 2, 2.1, 2.1.1, ...
        """
        visited = [self]
        for child in self.children:
            visited.extend(child.list_order())
        return visited

    def __iter__(self) -> Iterator[ECNode]:
        return iter(self.list_order())

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def find_by_ec_number(self, ec_number: ECNumber | str | None) -> ECNode | None:
        """Search this subtree for the node with ``ec_number``.

        None matches only a root node.
        """
        if ec_number is None:
            return self if self.is_root else None
        number = coerce_ec_number(ec_number)
        for node in self:
            if node.ec_number == number:
                return node
        return None

    def find_by_description_substring(
        self,
        query: str,
        case_sensitive: bool = False,
        ordering: str = "prefix",
    ) -> list[ECNode]:
        """Find every non-root node whose description contains ``query``.

        Args:
            query: Text to look for.
            case_sensitive: Match case exactly when True.
            ordering: Ordering of the returned nodes, "prefix" or "legacy".

        Returns:
            Matching nodes sorted by EC number.
        """
        needle = query if case_sensitive else query.casefold()
        matches = []
        for node in self:
            if node.is_root or node.description is None:
                continue
            haystack = node.description if case_sensitive else node.description.casefold()
            if needle in haystack:
                matches.append(node)
        return _sorted_nodes(matches, ordering)

    def find_by_exact_description(
        self,
        description: str,
        case_sensitive: bool = False,
        ordering: str = "prefix",
    ) -> list[ECNode]:
        """Find every non-root node whose description equals ``description``.

        Returns:
            Matching nodes sorted by EC number.
        """
        wanted = description if case_sensitive else description.casefold()
        matches = []
        for node in self:
            if node.is_root or node.description is None:
                continue
            text = node.description if case_sensitive else node.description.casefold()
            if text == wanted:
                matches.append(node)
        return _sorted_nodes(matches, ordering)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary for JSON export.

        Args:
            include_children: If True, recursively include children
        """
        result: dict[str, Any] = {
            "ec_number": str(self.ec_number) if self.ec_number else None,
            "description": self.description,
            "depth": self.depth,
            "is_leaf": self.is_leaf,
            "child_count": len(self.children),
            "hierarchy_path": self.hierarchy_path,
        }
        if include_children:
            result["children"] = [child.to_dict(True) for child in self.children]
        return result

    def render(self) -> str:
        """Render this subtree in list order, one tab per depth below 1."""
        return _render(self.list_order())

    def __str__(self) -> str:
        if self.is_root:
            return "root"
        return f"{self.ec_number}: {self.description}"

    def __repr__(self) -> str:
        label = "ROOT" if self.is_root else str(self.ec_number)
        return f"<ECNode {label} {(self.description or '')[:40]!r} children={len(self.children)}>"


def _render(nodes: Sequence[ECNode]) -> str:
    lines = []
    for node in nodes:
        if node.is_root:
            continue
        lines.append("\t" * max(node.depth - 1, 0) + str(node))
    return "\n".join(lines)


class ECTree:
    """
    A tree of Enzyme Commission numbers.

    Wraps the root node and provides insertion, lookup and traversal.
    Iterating the tree walks it in list order.
    """

    def __init__(self, ordering: str = "prefix") -> None:
        get_comparator(ordering)
        self.ordering = ordering
        self.root = ECNode()
        self._index: dict[ECNumber, ECNode] = {}

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def _attach(self, parent: ECNode, node: ECNode) -> None:
        parent._add_child(node)
        node._set_parent(parent)
        self._index.setdefault(node.ec_number, node)

    def add(self, node: ECNode) -> ECNode:
        """Add ``node`` after checking it is new and its parent exists.

        Raises:
            DuplicateError: If a node with the same EC number exists.
            MissingParentError: If the parent EC number is not in the tree.
        """
        number = node.ec_number
        if number is None:
            raise ECTreeError("Only the root may have no EC number")
        if number in self._index:
            raise DuplicateError(f"EC number {number} already exists", ec_number=str(number))

        parent_number = number.parent_number()
        if parent_number is None:
            parent = self.root
        else:
            parent = self._index.get(parent_number)
            if parent is None:
                raise MissingParentError(
                    f"Parent {parent_number} of {number} does not exist yet",
                    ec_number=str(number),
                )
        self._attach(parent, node)
        return node

    def add_fast(self, node: ECNode) -> ECNode:
        """Add ``node`` without safeguards.

        Nodes must arrive parents first. A node whose parent is missing is
        attached directly under the root, and repeated numbers are not
        rejected; they become siblings.
        """
        number = node.ec_number
        if number is None:
            raise ECTreeError("Only the root may have no EC number")
        parent_number = number.parent_number()
        parent = self.root
        if parent_number is not None:
            parent = self._index.get(parent_number, self.root)
        self._attach(parent, node)
        return node

    def insert(self, ec_number: ECNumber | str, description: str) -> ECNode:
        """Create a node and add it with the validating add()."""
        return self.add(ECNode(coerce_ec_number(ec_number), description))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_by_ec_number(self, ec_number: ECNumber | str | None) -> ECNode | None:
        """Return the node with ``ec_number``; None returns the root."""
        if ec_number is None:
            return self.root
        return self._index.get(coerce_ec_number(ec_number))

    def find_by_description_substring(
        self, query: str, case_sensitive: bool = False
    ) -> list[ECNode]:
        return self.root.find_by_description_substring(
            query, case_sensitive=case_sensitive, ordering=self.ordering
        )

    def find_by_exact_description(
        self, description: str, case_sensitive: bool = False
    ) -> list[ECNode]:
        return self.root.find_by_exact_description(
            description, case_sensitive=case_sensitive, ordering=self.ordering
        )

    def find_nodes_at_depth(self, depth: int) -> list[ECNode]:
        """Return every node at ``depth``, sorted by EC number.

        Depth is the EC number's depth, so an orphan that add_fast() hung
        under the root still counts at its own depth.
        """
        if depth == 0:
            return [self.root]
        matches = [node for node in self.breadth_first() if node.depth == depth]
        return _sorted_nodes(matches, self.ordering)

    def __contains__(self, ec_number: object) -> bool:
        if not isinstance(ec_number, (ECNumber, str)):
            return False
        try:
            return self.find_by_ec_number(ec_number) is not None
        except FormatError:
            return False

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def breadth_first(self) -> list[ECNode]:
        return self.root.breadth_first()

    def depth_first(self) -> list[ECNode]:
        return self.root.depth_first()

    def list_order(self) -> list[ECNode]:
        return self.root.list_order()

    def __iter__(self) -> Iterator[ECNode]:
        return iter(self.list_order())

    def __len__(self) -> int:
        """Number of nodes, not counting the root."""
        return self.root.descendant_count

    # ------------------------------------------------------------------
    # Statistics and export
    # ------------------------------------------------------------------

    @property
    def total_nodes(self) -> int:
        return len(self)

    @property
    def max_depth(self) -> int:
        """Get maximum depth of the tree."""
        return max((node.depth for node in self.root.list_order()), default=0)

    @property
    def leaf_count(self) -> int:
        """Count nodes with no children (the bare root is not a leaf)."""
        return sum(1 for node in self if not node.is_root and node.is_leaf)

    def get_statistics(self) -> dict[str, Any]:
        """Get tree statistics for analysis."""
        return {
            "total_nodes": self.total_nodes,
            "leaf_nodes": self.leaf_count,
            "max_depth": self.max_depth,
            "depth_distribution": self._get_depth_distribution(),
        }

    def _get_depth_distribution(self) -> dict[int, int]:
        """Get count of nodes at each depth."""
        return dict(Counter(node.depth for node in self if not node.is_root))

    def to_dict(self) -> dict[str, Any]:
        """Convert entire tree to dictionary."""
        return {
            "ordering": self.ordering,
            "statistics": self.get_statistics(),
            "root": self.root.to_dict(include_children=True),
        }

    def render(self) -> str:
        """Render the whole tree in list order, root omitted."""
        return _render(self.list_order())

    def render_breadth_first(self) -> str:
        return _render(self.breadth_first())

    def print_tree(self) -> None:
        """Print the tree in list order."""
        print(self.render())

    def __repr__(self) -> str:
        return f"<ECTree nodes={self.total_nodes} depth={self.max_depth}>"
