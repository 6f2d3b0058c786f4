"""Repeated load-and-parse timing, with optional leak accounting."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from os import PathLike
from typing import IO

from .config import ParserOptions
from .entries import release_entries
from .parser import parse_all
from .printer import print_entries
from .source import load
from .tracking import AllocationTracker

logger = logging.getLogger("flatyaml.bench")


@dataclass
class BenchResult:
    iterations: int
    total_ms: float
    total_allocated: int | None = None
    total_freed: int | None = None
    leaks: int | None = None

    @property
    def average_ms(self) -> float:
        if self.iterations == 0:
            return 0.0
        return self.total_ms / self.iterations


def run_once(
    path: str | PathLike[str],
    *,
    options: ParserOptions | None = None,
    print_to: IO[str] | None = None,
    tracker: AllocationTracker | None = None,
) -> float:
    """Load and parse *path* once; return the elapsed milliseconds.

    Printing (when *print_to* is given) and cleanup are not timed. Entries
    are released before the source they point into.
    """
    options = options or ParserOptions()
    begin = time.perf_counter()
    source = load(path, encoding=options.encoding, tracker=tracker)
    try:
        entries = parse_all(source, options, tracker)
        elapsed = (time.perf_counter() - begin) * 1000
        if print_to is not None:
            print_entries(entries, print_to)
        release_entries(entries)
    finally:
        source.release()
    return elapsed


def benchmark(
    path: str | PathLike[str],
    iterations: int = 999,
    *,
    options: ParserOptions | None = None,
    tracker: AllocationTracker | None = None,
) -> BenchResult:
    """Run ``run_once`` *iterations* times without printing."""
    if iterations < 0:
        raise ValueError("iterations must be >= 0")
    total = 0.0
    for _ in range(iterations):
        total += run_once(path, options=options, tracker=tracker)

    result = BenchResult(iterations=iterations, total_ms=total)
    if tracker is not None:
        result.total_allocated = tracker.total_allocated
        result.total_freed = tracker.total_freed
        result.leaks = tracker.leaks
    logger.debug("benchmarked %s: %d runs, %.3fms avg", path, iterations, result.average_ms)
    return result
