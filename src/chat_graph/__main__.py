"""Entry point for ``python -m chat_graph``.

Provides a CLI that accepts a CSV transcript and builds its interaction
graph.  Uses stdlib :mod:`argparse` for argument parsing.

Subcommands:
    summary -- Default. Print the staged graph report.
    export  -- Write node and edge tables for a renderer (JSON or CSV).

Exit codes:
    0 -- Graph built successfully (including partial graphs with drops).
    1 -- An error occurred (file not found, unreadable or not UTF-8,
         config error, bad transcript format, inconsistent turn group).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from chat_graph.config import ConfigError, load_settings
from chat_graph.demo_output import print_pipeline_result
from chat_graph.exceptions import InconsistentTurnGroupError, TranscriptFormatError
from chat_graph.export import write_graph_csv, write_graph_json
from chat_graph.log import setup_logging
from chat_graph.pipeline import run_pipeline_file

_SUBCOMMANDS = {"summary", "export"}


def _positive_int(value: str) -> int:
    """argparse type for weights: an integer of at least 1."""
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value!r}")
    return parsed


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "transcript_file",
        type=str,
        help="Path to the CSV transcript (speaker, turn_id, raw_annotation).",
    )
    parser.add_argument(
        "--min-weight",
        type=_positive_int,
        default=None,
        help=(
            "Hide edges lighter than this "
            "(defaults to CHAT_GRAPH_MIN_EDGE_WEIGHT, else 1)."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="chat-graph",
        description="Build a weighted response graph from an annotated chat transcript.",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- "summary" subcommand (default) -------------------------------
    summary_parser = subparsers.add_parser(
        "summary",
        help="Print the graph report for a transcript.",
    )
    _add_common_arguments(summary_parser)

    # --- "export" subcommand ------------------------------------------
    export_parser = subparsers.add_parser(
        "export",
        help="Write node and edge tables for a renderer.",
    )
    _add_common_arguments(export_parser)
    export_parser.add_argument(
        "-o",
        "--output",
        type=str,
        required=True,
        help="Output file (json) or directory (csv).",
    )
    export_parser.add_argument(
        "--format",
        choices=("json", "csv"),
        default="json",
        help="Output format (default: json).",
    )

    return parser


def _resolve_command(
    parser: argparse.ArgumentParser,
    argv: list[str],
) -> argparse.Namespace:
    """Parse *argv*, routing to ``summary`` when no subcommand is given.

    ``python -m chat_graph chat.csv`` and ``python -m chat_graph -v chat.csv``
    are equivalent to the explicit ``summary`` forms.
    """
    if not argv:
        argv = ["summary"]
    elif argv[0] in {"-h", "--help"}:
        pass
    elif argv[0] not in _SUBCOMMANDS:
        argv = ["summary", *argv]

    return parser.parse_args(argv)


def _check_readable(transcript_path: Path) -> str | None:
    """Return an error message if *transcript_path* cannot be read."""
    if not transcript_path.exists():
        return f"File not found: {transcript_path}"
    if not transcript_path.is_file():
        return f"Not a file: {transcript_path}"
    try:
        with open(transcript_path, "rb") as f:
            f.read(1)
    except PermissionError:
        return f"Permission denied: {transcript_path}"
    return None


def main(argv: list[str] | None = None) -> int:
    """Run the chat-graph CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = _resolve_command(parser, argv if argv is not None else sys.argv[1:])

    try:
        settings = load_settings()
    except ConfigError as exc:
        setup_logging("INFO")
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    transcript_path = Path(args.transcript_file)
    problem = _check_readable(transcript_path)
    if problem:
        print(f"Error: {problem}", file=sys.stderr)
        return 1

    min_weight = args.min_weight if args.min_weight is not None else settings.min_edge_weight

    try:
        result = run_pipeline_file(transcript_path, settings.scheme)
    except (TranscriptFormatError, InconsistentTurnGroupError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "export":
        if args.format == "csv":
            write_graph_csv(args.output, result.graph, result.store, min_weight)
        else:
            write_graph_json(args.output, result.graph, result.store, min_weight)
        return 0

    print_pipeline_result(result, min_weight)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
