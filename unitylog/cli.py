"""unitylog: read Unity3D Player and Editor logs from the command line.

Usage example: unitylog Player.log, or cat Player.log | unitylog
"""
import json
import logging
import sys
from argparse import ArgumentParser
from pathlib import Path

from .config import configure_logging, load_config
from .query import filter_entries, parse_severities
from .report_generator import ReportGenerator
from .segmenter import LogSegmenter, UnrecognizedInputError


logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="unitylog",
        description="Read Unity3D Player and Editor logs from development and release builds.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Log file path (reads stdin when omitted)",
    )
    parser.add_argument(
        "-c", "--count",
        type=int,
        help="How many lines of each short callstack are printed (default from config: 3)",
    )
    parser.add_argument(
        "-n", "--no-collapse",
        action="store_true",
        help="Do not collapse same log statements together",
    )
    parser.add_argument(
        "--order",
        choices=["sorted", "first_seen"],
        help="Order of collapsed entries",
    )
    parser.add_argument(
        "--type",
        nargs="+",
        dest="types",
        help="Only show these log types (Log, Warning, Error, Unknown)",
    )
    parser.add_argument(
        "--search",
        help="Only show entries whose message contains this text (case-insensitive)",
    )
    parser.add_argument(
        "--output",
        choices=["text", "json", "html"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--config",
        help="Path to a config.yaml",
    )
    return parser


def read_input(path):
    """Read the whole log from a file or stdin."""
    if path is None:
        return sys.stdin.read(), "<stdin>"
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read(), path


def format_text(record) -> str:
    if record is None:
        return "(nothing)"
    line = f"[{record['type']}] {record['message']}"
    if record["short"]:
        line += f"\n    {record['short']}"
    return line


def run(args) -> int:
    settings = load_config(Path(args.config) if args.config else None)
    configure_logging(settings)

    if args.count is not None and args.count < 1:
        print("Error: --count must be a positive integer", file=sys.stderr)
        return 2

    try:
        severities = parse_severities(args.types)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    options = settings.segmenter.to_options(
        count=args.count,
        collapse=False if args.no_collapse else None,
        collapse_order=args.order,
    )
    segmenter = LogSegmenter(options)

    try:
        text, source = read_input(args.file)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    try:
        entries = segmenter.segment(text, source)
    except UnrecognizedInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    entries = filter_entries(entries, severities=severities, search=args.search)
    logger.debug("%d entries after filtering", len(entries))

    if args.output == "html":
        generator = ReportGenerator(title=settings.report.title)
        print(generator.render(entries, options.summary_lines, source=source))
    elif args.output == "json":
        print(json.dumps(segmenter.to_records(entries), indent=2))
    else:
        for record in segmenter.to_records(entries):
            print(format_text(record))
    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()
    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)


if __name__ == "__main__":
    main()
