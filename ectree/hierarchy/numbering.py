"""
Enzyme Commission number value type and ordering rules.

An EC number is a dotted path of non-negative integers such as "3.4.5".
Depth is the number of components; the tree root has no number and depth 0.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any

from ectree.exceptions import FormatError

_CODE_RE = re.compile(r"[0-9]+")
_WILDCARD = "-"


@dataclass(frozen=True, order=True)
class ECNumber:
    """An immutable EC number.

    Natural ordering compares codes position by position; when one number
    is a strict prefix of the other the shorter one sorts first. This is
    the order used for children and for sorting records before insertion.

    Example:
        >>> ECNumber.parse("1.4.5").depth
        3
        >>> str(ECNumber.parse("1.4.5").parent_number())
        '1.4'
    """

    codes: tuple[int, ...]

    def __post_init__(self) -> None:
        codes = tuple(self.codes)
        if not codes:
            raise FormatError("EC number needs at least one code")
        for code in codes:
            if isinstance(code, bool) or not isinstance(code, int):
                raise FormatError(f"Bad EC code {code!r} in {codes!r}")
            if code < 0:
                raise FormatError(
                    f"EC codes must be non-negative, got {code}",
                    ec_number=".".join(str(c) for c in codes),
                )
        object.__setattr__(self, "codes", codes)

    @classmethod
    def parse(cls, text: str, allow_wildcards: bool = False) -> ECNumber:
        """Parse a dotted EC number such as "1" or "3.4.5".

        Args:
            text: The dotted number. Surrounding whitespace is ignored.
            allow_wildcards: Accept trailing "-" placeholders, so that
                "1.1.-.-" parses as 1.1.

        Raises:
            FormatError: If any component is not a non-negative integer.
        """
        if not isinstance(text, str):
            raise FormatError(f"Bad EC number {text!r}")
        tokens = [token.strip() for token in text.strip().split(".")]

        if allow_wildcards:
            while len(tokens) > 1 and tokens[-1] == _WILDCARD:
                tokens.pop()

        codes = []
        for token in tokens:
            if not _CODE_RE.fullmatch(token):
                raise FormatError(f"Bad EC number {text!r}", ec_number=text)
            codes.append(int(token))
        return cls(tuple(codes))

    @classmethod
    def from_codes(cls, codes: Iterable[int]) -> ECNumber:
        """Build a number directly from its components, top level first."""
        return cls(tuple(codes))

    @property
    def depth(self) -> int:
        return len(self.codes)

    def code_at(self, depth: int) -> int:
        """Return the component at a 1-indexed depth.

        Raises:
            IndexError: If depth is outside 1..self.depth.
        """
        if depth < 1 or depth > len(self.codes):
            raise IndexError(
                f"Depth {depth} out of range for {self} (depth {self.depth})"
            )
        return self.codes[depth - 1]

    def parent_number(self) -> ECNumber | None:
        """Return the number the parent node is expected to have.

        Top-level numbers have the root as parent, which has no number,
        so None is returned for them.
        """
        if len(self.codes) == 1:
            return None
        return ECNumber(self.codes[:-1])

    def is_prefix_of(self, other: ECNumber) -> bool:
        """True if this number is a strict ancestor of ``other``."""
        return (
            len(self.codes) < len(other.codes)
            and other.codes[: len(self.codes)] == self.codes
        )

    def __str__(self) -> str:
        return ".".join(str(code) for code in self.codes)

    def __repr__(self) -> str:
        return f"ECNumber('{self}')"


def parse_ec_number(text: str, allow_wildcards: bool = False) -> ECNumber:
    """Parse text into an ECNumber. See ECNumber.parse."""
    return ECNumber.parse(text, allow_wildcards=allow_wildcards)


def coerce_ec_number(value: ECNumber | str | Sequence[int]) -> ECNumber:
    """Accept an ECNumber, its dotted text, or a sequence of codes."""
    if isinstance(value, ECNumber):
        return value
    if isinstance(value, str):
        return ECNumber.parse(value)
    return ECNumber.from_codes(value)


# ---------------------------------------------------------------------------
# Comparators
# ---------------------------------------------------------------------------


def prefix_compare(a: ECNumber, b: ECNumber) -> int:
    """Three-way comparison in natural order (shorter prefix first)."""
    if a == b:
        return 0
    return -1 if a < b else 1


def legacy_compare(a: ECNumber, b: ECNumber) -> int:
    """Three-way comparison reproducing the historical EC tree comparator.

    Codes are compared up to the shorter depth. When those are all equal
    but the numbers differ, the first operand is reported as smaller,
    whichever of the two is the prefix. The result is therefore not
    antisymmetric for prefix pairs: legacy_compare(1, 1.1) and
    legacy_compare(1.1, 1) are both -1.
    """
    if a == b:
        return 0
    for depth in range(1, min(a.depth, b.depth) + 1):
        left, right = a.code_at(depth), b.code_at(depth)
        if left < right:
            return -1
        if left > right:
            return 1
    return -1


_COMPARATORS: dict[str, Callable[[ECNumber, ECNumber], int]] = {
    "prefix": prefix_compare,
    "legacy": legacy_compare,
}


def get_comparator(ordering: str = "prefix") -> Callable[[ECNumber, ECNumber], int]:
    """Return the three-way comparator named by ``ordering``."""
    try:
        return _COMPARATORS[ordering]
    except KeyError:
        raise ValueError(
            f"Unknown ordering {ordering!r}, expected one of {sorted(_COMPARATORS)}"
        ) from None


def depth_first_compare(
    a: ECNumber, b: ECNumber, ordering: str = "prefix"
) -> int:
    """Compare shallower numbers first, then by the chosen ordering.

    Sorting records with this comparator guarantees that every parent is
    inserted before any of its children.
    """
    if a.depth != b.depth:
        return -1 if a.depth < b.depth else 1
    return get_comparator(ordering)(a, b)


def depth_first_key(ordering: str = "prefix") -> Callable[[ECNumber], Any]:
    """Sort key for depth_first_compare."""
    if ordering == "prefix":
        return lambda number: (number.depth, number)
    compare = get_comparator(ordering)
    return cmp_to_key(
        lambda a, b: (a.depth > b.depth) - (a.depth < b.depth) or compare(a, b)
    )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class NumberingValidator:
    """Validates a set of (number, description) records before building."""

    @staticmethod
    def validate(records: Iterable[tuple[ECNumber, str]]) -> list[dict[str, str]]:
        """Check records for duplicates, missing parents, and top-level gaps.

        Args:
            records: Extracted (ECNumber, description) pairs in any order.

        Returns:
            List of issue dictionaries with 'type' and 'message' keys.
        """
        issues: list[dict[str, str]] = []
        seen: set[ECNumber] = set()
        numbers: list[ECNumber] = []

        for number, _description in records:
            if number in seen:
                issues.append({
                    "type": "duplicate_number",
                    "message": f"Duplicate EC number: {number}",
                })
                continue
            seen.add(number)
            numbers.append(number)

        for number in sorted(numbers, key=depth_first_key()):
            parent = number.parent_number()
            if parent is not None and parent not in seen:
                issues.append({
                    "type": "missing_parent",
                    "message": f"EC number {number} has no parent {parent}",
                })

        top_level = sorted(n.code_at(1) for n in numbers if n.depth == 1)
        NumberingValidator._check_gaps(top_level, issues)
        return issues

    @staticmethod
    def _check_gaps(top_level: list[int], issues: list[dict[str, str]]) -> None:
        """Check for gaps in top-level numbering.

        Args:
            top_level: Sorted top-level codes.
            issues: List to append issues to.
        """
        for previous, actual in zip(top_level, top_level[1:]):
            expected = previous + 1
            if actual > expected:
                issues.append({
                    "type": "numbering_gap",
                    "message": (
                        f"Gap in numbering: expected {expected} "
                        f"after {previous}, found {actual}"
                    ),
                })
