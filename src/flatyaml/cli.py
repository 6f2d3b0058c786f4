"""``flatyaml`` command-line entry point.

    flatyaml show FILE            print every entry
    flatyaml bench FILE [-n N]    time N load+parse runs and report leaks
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import IO, Sequence

from .bench import benchmark, run_once
from .config import OnError, ParserOptions
from .entries import release_entries
from .errors import ParseError, SourceError
from .parser import ABORT_EXIT_STATUS, parse_file
from .printer import print_entries
from .tracking import AllocationTracker

logger = logging.getLogger("flatyaml.cli")

EXIT_OK = 0
EXIT_SOURCE_ERROR = 1
EXIT_PARSE_ERROR = ABORT_EXIT_STATUS


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(name)s] [%(levelname)s] %(message)s",
    )


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flatyaml",
        description="Parse flat 'key: value' files.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument(
        "--on-error",
        choices=[p.value for p in OnError],
        default=None,
        help="what a grammar violation does (default: FLATYAML_ON_ERROR or 'raise')",
    )
    parser.add_argument("--encoding", default=None, help="source encoding")

    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="print parsed entries")
    show.add_argument("path")

    bench = sub.add_parser("bench", help="time repeated parses")
    bench.add_argument("path")
    bench.add_argument("-n", "--iterations", type=_non_negative_int, default=999)
    bench.add_argument("--show", action="store_true", help="print the entries of one extra run")
    return parser


def _options(args: argparse.Namespace) -> ParserOptions:
    options = ParserOptions.from_env()
    if args.on_error is not None:
        options = dataclasses.replace(options, on_error=OnError(args.on_error))
    if args.encoding is not None:
        options = dataclasses.replace(options, encoding=args.encoding)
    return options


def _show(args: argparse.Namespace, options: ParserOptions, dest: IO[str]) -> int:
    source, entries = parse_file(args.path, options)
    try:
        print_entries(entries, dest)
    finally:
        release_entries(entries)
        source.release()
    return EXIT_OK


def _bench(args: argparse.Namespace, options: ParserOptions, dest: IO[str]) -> int:
    tracker = AllocationTracker()
    result = benchmark(args.path, args.iterations, options=options, tracker=tracker)
    if args.show:
        run_once(args.path, options=options, print_to=dest, tracker=tracker)
    print(
        f"Allocations: {tracker.total_allocated} / {tracker.total_freed} "
        "(Total Allocated / Total Freed)",
        file=dest,
    )
    print(f"Memory Leaks: {tracker.leaks}", file=dest)
    print(f"Average ({result.iterations}) is {result.average_ms:f}ms", file=dest)
    return EXIT_OK


def main(argv: Sequence[str] | None = None, dest: IO[str] | None = None) -> int:
    """Run the CLI and return its exit status."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    dest = dest if dest is not None else sys.stdout

    try:
        options = _options(args)
    except ValueError as exc:
        print(f"flatyaml: {exc}", file=sys.stderr)
        return EXIT_SOURCE_ERROR

    handler = _show if args.command == "show" else _bench
    try:
        return handler(args, options, dest)
    except SourceError as exc:
        logger.error("%s", exc)
        print(f"flatyaml: {exc}", file=sys.stderr)
        return EXIT_SOURCE_ERROR
    except ParseError as exc:
        logger.error("%s", exc)
        print(f"flatyaml: {exc}", file=sys.stderr)
        return EXIT_PARSE_ERROR


if __name__ == "__main__":
    sys.exit(main())
