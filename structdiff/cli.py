"""structdiff CLI.

Entry point for the ``structdiff`` command-line tool.

Usage:
    structdiff [-s] [-e REGEX]... [--format text|json] [-v] file FILE1 FILE2
    structdiff [-s] [-e REGEX]... [--format text|json] [-v] direct JSON1 JSON2

Exit status: 0 when the documents match, 1 when differences were found,
2 when an input could not be read or parsed.
"""

import argparse
import json
import sys

from .core import compare_serialized
from .errors import StructDiffError
from .formats import load_file
from .logger import configure, get_logger
from .options import CompareOptions
from .tree import DiffEntry, DiffKind

logger = get_logger(__name__)

EXIT_DIFFERENT = 1
EXIT_ERROR = 2

# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def _format_text(diffs: list[tuple[DiffKind, DiffEntry]]) -> str:
    return "\n".join(f"{kind}: {entry}" for kind, entry in diffs)


def _format_json(diffs: list[tuple[DiffKind, DiffEntry]]) -> str:
    records = []
    for kind, entry in diffs:
        record = {"kind": kind.name.lower(), "path": entry.path_parts()}
        if entry.values is not None:
            record["left"], record["right"] = entry.values
        records.append(record)
    return json.dumps(records, indent=2, ensure_ascii=False, default=str)


# ---------------------------------------------------------------------------
# Input modes
# ---------------------------------------------------------------------------


def _read_files(args: argparse.Namespace) -> tuple[str, str]:
    return load_file(args.file_1), load_file(args.file_2)


def _read_direct(args: argparse.Namespace) -> tuple[str, str]:
    return args.json_1, args.json_2


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="structdiff",
        description="Structural diff of two JSON documents",
    )
    parser.add_argument(
        "-s",
        "--sort-arrays",
        action="store_true",
        help="Deep-sort arrays before comparing",
    )
    parser.add_argument(
        "-e",
        "--exclude-keys",
        action="append",
        default=[],
        metavar="REGEX",
        help="Exclude object keys matching REGEX (repeatable)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output)",
    )
    subparsers = parser.add_subparsers(dest="command")

    file_parser = subparsers.add_parser("file", aliases=["f"], help="Compare two JSON files")
    file_parser.add_argument("file_1", help="Path to the left document")
    file_parser.add_argument("file_2", help="Path to the right document")
    file_parser.set_defaults(read=_read_files)

    direct_parser = subparsers.add_parser(
        "direct", aliases=["d"], help="Compare two JSON documents given inline"
    )
    direct_parser.add_argument("json_1", help="Left document as JSON text")
    direct_parser.add_argument("json_2", help="Right document as JSON text")
    direct_parser.set_defaults(read=_read_direct)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "read"):
        parser.print_help()
        sys.exit(EXIT_ERROR)

    configure(args.verbose)

    try:
        logger.info("Getting input")
        json_1, json_2 = args.read(args)

        logger.info("Evaluating exclusion regex list")
        options = CompareOptions.from_patterns(
            args.exclude_keys, sort_arrays=args.sort_arrays, lenient=True
        )

        logger.info("Comparing")
        mismatch = compare_serialized(
            json_1, json_2, options.sort_arrays, options.exclude_keys
        )
    except StructDiffError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_ERROR)

    logger.info("Printing results")
    diffs = mismatch.all_diffs()
    if args.format == "json":
        print(_format_json(diffs))
    elif diffs:
        print(_format_text(diffs))

    if diffs:
        sys.exit(EXIT_DIFFERENT)


if __name__ == "__main__":
    main()
