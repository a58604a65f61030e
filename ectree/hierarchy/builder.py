"""
EC tree builder.

Builds ECTrees from ENZYME nomenclature text, such as the ``enzclass.txt``
file distributed by ExPASy:

    1. 1. 1.-    With NAD(+) or NADP(+) as acceptor.

Lines are parsed into (ECNumber, description) records, sorted shallow
before deep, and inserted into a fresh tree.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from ectree.config import BuildConfig, DuplicatePolicy
from ectree.hierarchy.numbering import ECNumber, NumberingValidator, depth_first_key
from ectree.hierarchy.tree import ECNode, ECTree

logger = logging.getLogger(__name__)

# Up to three leading dotted codes, separator noise, then a description
# that starts at the first letter.
LINE_RE = re.compile(
    r"^(\d+)(?:\.\s*)?(\d+)?(?:\.\s*)?(\d+)?(?:[\s.\-]*)(?P<desc>[A-Za-z].*)$"
)

Record = tuple[ECNumber, str]


class ECTreeBuilder:
    """
    Builds EC trees from nomenclature lines.

    Parsing is lenient: lines that do not match the grammar (headers,
    blank lines, separators) are skipped.
    """

    @staticmethod
    def parse_line(line: str) -> Record | None:
        """
        Extract an EC number and description from one line.

        Examples:
        "1. -. -.-  Oxidoreductases." -> (1, "Oxidoreductases.")
        "1. 1. 1.-    With NAD(+)..." -> (1.1.1, "With NAD(+)...")
        "1.1 Acting on CH-OH" -> (1.1, "Acting on CH-OH")
        "-----------" -> None
        """
        match = LINE_RE.match(line.rstrip("\r\n"))
        if match is None:
            return None
        codes = []
        for group in match.groups()[:3]:
            if group is None:
                break
            codes.append(int(group))
        return ECNumber.from_codes(codes), match.group("desc")

    @staticmethod
    def extract_records(lines: Iterable[str]) -> list[Record]:
        """Parse every line, keeping matches in input order."""
        records = []
        skipped = 0
        for line in lines:
            record = ECTreeBuilder.parse_line(line)
            if record is None:
                skipped += 1
                continue
            records.append(record)
        logger.debug("Extracted %d records, skipped %d lines", len(records), skipped)
        return records

    @staticmethod
    def sort_records(records: Iterable[Record], ordering: str = "prefix") -> list[Record]:
        """Sort records shallow before deep, then by EC number.

        The sort is stable, so records with equal numbers keep input order.
        """
        key = depth_first_key(ordering)
        return sorted(records, key=lambda record: key(record[0]))

    @staticmethod
    def resolve_duplicates(
        records: list[Record], policy: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST
    ) -> list[Record]:
        """Apply the duplicate policy to sorted records.

        KEEP_FIRST keeps the first occurrence of a number, REPLACE keeps the
        last one, and SIBLING keeps them all.
        """
        if policy is DuplicatePolicy.SIBLING:
            return list(records)

        chosen: dict[ECNumber, int] = {}
        for position, (number, _description) in enumerate(records):
            if policy is DuplicatePolicy.REPLACE or number not in chosen:
                chosen[number] = position

        kept = sorted(chosen.values())
        dropped = len(records) - len(kept)
        if dropped:
            logger.debug("Dropped %d duplicate records (%s)", dropped, policy.value)
        return [records[position] for position in kept]

    @staticmethod
    def build_from_records(
        records: Iterable[Record], config: BuildConfig | None = None
    ) -> ECTree:
        """Sort records and insert them into a new tree.

        Args:
            records: (ECNumber, description) pairs in any order.
            config: Build configuration. Uses defaults when None.

        Returns:
            ECTree holding every kept record.

        Raises:
            DuplicateError: Strict mode only, for a repeated number.
            MissingParentError: Strict mode only, for an orphaned number.
        """
        cfg = config or BuildConfig()
        ordered = ECTreeBuilder.sort_records(records, cfg.ordering)
        ordered = ECTreeBuilder.resolve_duplicates(ordered, cfg.duplicate_policy)

        tree = ECTree(ordering=cfg.ordering)
        insert = tree.add if cfg.strict else tree.add_fast
        for number, description in ordered:
            insert(ECNode(number, description))

        logger.info(
            "Built EC tree with %d nodes (max depth %d)", len(tree), tree.max_depth
        )
        return tree

    @staticmethod
    def build_from_lines(
        lines: Iterable[str], config: BuildConfig | None = None
    ) -> ECTree:
        """
        Build an ECTree from nomenclature text lines.

        Strategy:
        1. Match each line against the line grammar, skipping non-matches
        2. Sort records shallow before deep, then by EC number
        3. Resolve repeated numbers according to the duplicate policy
        4. Insert records parents first
        """
        records = ECTreeBuilder.extract_records(lines)
        return ECTreeBuilder.build_from_records(records, config)

    @staticmethod
    def build_from_text(text: str, config: BuildConfig | None = None) -> ECTree:
        return ECTreeBuilder.build_from_lines(text.splitlines(), config)

    @staticmethod
    def build_from_source(
        source: str | Path, config: BuildConfig | None = None
    ) -> ECTree:
        """Read lines from a file path or URL and build a tree from them.

        Raises:
            LoaderError: If no loader accepts the source or reading fails.
        """
        from ectree.loaders import LoaderRegistry

        cfg = config or BuildConfig()
        lines = LoaderRegistry.read_lines(source, cfg)
        return ECTreeBuilder.build_from_lines(lines, cfg)

    @staticmethod
    def build_from_file(
        path: str | Path, config: BuildConfig | None = None
    ) -> ECTree:
        from ectree.loaders import TextFileLoader

        cfg = config or BuildConfig()
        lines = TextFileLoader(encoding=cfg.encoding).read_lines(Path(path))
        return ECTreeBuilder.build_from_lines(lines, cfg)

    @staticmethod
    def build_from_url(url: str, config: BuildConfig | None = None) -> ECTree:
        from ectree.loaders import RemoteLoader

        cfg = config or BuildConfig()
        lines = RemoteLoader(timeout=cfg.timeout).read_lines(url)
        return ECTreeBuilder.build_from_lines(lines, cfg)

    @staticmethod
    def validate_lines(lines: Iterable[str]) -> list[dict[str, str]]:
        """Report duplicate, orphaned, and gapped numbers without building."""
        return NumberingValidator.validate(ECTreeBuilder.extract_records(lines))


def build_tree(lines: Iterable[str], config: BuildConfig | None = None) -> ECTree:
    """Build an ECTree from nomenclature text lines."""
    return ECTreeBuilder.build_from_lines(lines, config)
