"""
Command line interface for EC trees.

Builds a tree from a nomenclature file or URL and prints, looks up, or
searches it. Each error kind maps to its own exit status.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from ectree import __version__
from ectree.config import BuildConfig, DuplicatePolicy
from ectree.exceptions import DuplicateError, FormatError, MissingParentError
from ectree.hierarchy import ECNumber, ECTreeBuilder
from ectree.loaders import DEFAULT_ENZCLASS_URL, LoaderError, LoaderRegistry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_FORMAT_ERROR = 3
EXIT_DUPLICATE = 4
EXIT_MISSING_PARENT = 5
EXIT_LOADER_ERROR = 6


# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the ectree CLI."""
    p = argparse.ArgumentParser(
        prog="ectree",
        description="Browse the Enzyme Commission classification tree.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "-s", "--source",
        default=DEFAULT_ENZCLASS_URL,
        help="Nomenclature file path or URL (default: ExPASy enzclass.txt).",
    )
    p.add_argument(
        "--duplicates",
        choices=[policy.value for policy in DuplicatePolicy],
        default=DuplicatePolicy.KEEP_FIRST.value,
        help="How repeated EC numbers are handled while building.",
    )
    p.add_argument(
        "--ordering",
        choices=["prefix", "legacy"],
        default="prefix",
        help="Ordering of search results.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail on duplicate or orphaned numbers instead of tolerating them.",
    )
    p.add_argument(
        "--no-wildcards",
        dest="allow_wildcards",
        action="store_false",
        help='Reject "-" placeholders such as "1.1.-.-" in EC numbers.',
    )
    p.add_argument("--json", action="store_true", help="Emit JSON instead of text.")
    p.add_argument("--debug", action="store_true", help="Enable debug logging.")

    sub = p.add_subparsers(dest="command", required=True)

    show = sub.add_parser("print", help="Print the tree.")
    show.add_argument(
        "--order",
        choices=["list", "breadth", "depth"],
        default="list",
        help="Traversal order (default: list).",
    )

    find = sub.add_parser("find", help="Look up a node by EC number.")
    find.add_argument("ec_number")

    search = sub.add_parser("search", help="Search node descriptions.")
    search.add_argument("query")
    search.add_argument("--exact", action="store_true", help="Match the whole description.")
    search.add_argument("--case-sensitive", action="store_true")

    depth = sub.add_parser("depth", help="List nodes at a depth.")
    depth.add_argument("depth", type=int)

    sub.add_parser("check", help="Report duplicate, orphaned, and gapped numbers.")
    return p


def args_to_config(args: argparse.Namespace) -> BuildConfig:
    return BuildConfig(
        duplicate_policy=DuplicatePolicy(args.duplicates),
        ordering=args.ordering,
        strict=args.strict,
        allow_wildcards=args.allow_wildcards,
    )


# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _emit(args: argparse.Namespace, text: str, payload: object) -> None:
    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(text)


def _run_command(args: argparse.Namespace, config: BuildConfig) -> int:
    if args.command == "check":
        lines = LoaderRegistry.read_lines(args.source, config)
        issues = ECTreeBuilder.validate_lines(lines)
        _emit(args, "\n".join(i["message"] for i in issues) or "No issues found", issues)
        return EXIT_OK

    tree = ECTreeBuilder.build_from_source(args.source, config)

    if args.command == "print":
        if args.order == "list":
            nodes, text = tree.list_order(), tree.render()
        elif args.order == "breadth":
            nodes, text = tree.breadth_first(), tree.render_breadth_first()
        else:
            nodes = tree.depth_first()
            text = "\n".join(str(node) for node in nodes if not node.is_root)
        _emit(args, text, [n.to_dict(include_children=False) for n in nodes if not n.is_root])
        return EXIT_OK

    if args.command == "find":
        number = ECNumber.parse(args.ec_number, allow_wildcards=config.allow_wildcards)
        node = tree.find_by_ec_number(number)
        if node is None:
            logger.error("EC number %s not found", number)
            return EXIT_NOT_FOUND
        _emit(args, f"{node}\n{node.hierarchy_path}", node.to_dict(include_children=False))
        return EXIT_OK

    if args.command == "search":
        if args.exact:
            matches = tree.find_by_exact_description(args.query, args.case_sensitive)
        else:
            matches = tree.find_by_description_substring(args.query, args.case_sensitive)
    else:
        matches = tree.find_nodes_at_depth(args.depth)

    if not matches:
        return EXIT_NOT_FOUND
    _emit(
        args,
        "\n".join(str(node) for node in matches),
        [node.to_dict(include_children=False) for node in matches],
    )
    return EXIT_OK


# -----------------------------------------------------------------------------
# ENTRYPOINT
# -----------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """
    Run the CLI.

    Returns:
        Process exit code (0 for success, non-zero for failure).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return _run_command(args, args_to_config(args))
    except FormatError as exc:
        logger.error("Bad EC number %s: %s", exc.ec_number, exc)
        return EXIT_FORMAT_ERROR
    except DuplicateError as exc:
        logger.error("Duplicate EC number %s: %s", exc.ec_number, exc)
        return EXIT_DUPLICATE
    except MissingParentError as exc:
        logger.error("Missing parent for %s: %s", exc.ec_number, exc)
        return EXIT_MISSING_PARENT
    except LoaderError as exc:
        logger.error("Could not read %s: %s", exc.source, exc)
        return EXIT_LOADER_ERROR


if __name__ == "__main__":
    sys.exit(main())
