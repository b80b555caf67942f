"""Parse-timing harness: repeated parsing of a source corpus."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from syntaxkit.errors import EngineError, InvalidInputError, SourceReadError
from syntaxkit.incremental import AffectRangeCollector, EditSet, ParseEngine

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A discovered source file and its raw content."""

    path: Path
    content: bytes


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Most recent tree and affected-range collector for one file content."""

    tree: Any
    affect_range: AffectRangeCollector | None


@dataclass(frozen=True, slots=True)
class PerfReport:
    """Aggregated measurements of one harness run."""

    iterations: int
    file_count: int
    parse_calls: int
    total_seconds: float
    instructions: int | None = None

    @property
    def mean_milliseconds(self) -> float:
        return self.total_seconds / self.iterations * 1000

    @property
    def mean_instructions(self) -> float | None:
        if self.instructions is None:
            return None
        return self.instructions / self.iterations


# ---------------------------------------------------------------------------
# Source discovery
# ---------------------------------------------------------------------------


def discover_sources(directory: Path, extension: str) -> list[SourceFile]:
    """Read every file under *directory* ending in *extension*, sorted by path."""
    if not directory.is_dir():
        raise InvalidInputError(f"not a directory: {directory}")
    if not extension.startswith("."):
        extension = "." + extension

    try:
        paths = sorted(p for p in directory.rglob(f"*{extension}") if p.is_file())
    except OSError as exc:
        raise SourceReadError(directory, exc.strerror or str(exc)) from exc

    sources: list[SourceFile] = []
    for path in paths:
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise SourceReadError(path, exc.strerror or str(exc)) from exc
        sources.append(SourceFile(path, content))

    log.debug("discovered %d %s file(s) under %s", len(sources), extension, directory)
    return sources


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------


def run_performance_test(
    engine: ParseEngine,
    sources: Sequence[SourceFile],
    iterations: int,
    *,
    incremental: bool = False,
    clock: Callable[[], float] = time.perf_counter,
    instruction_counter: Callable[[], int] | None = None,
) -> PerfReport:
    """Parse every source *iterations* times and aggregate the elapsed time.

    In incremental mode the tree produced for a file in one iteration is passed
    back to the engine in the next, together with an empty edit set.
    """
    if iterations < 1:
        raise InvalidInputError(f"iterations must be at least 1, got {iterations}")
    if not sources:
        raise InvalidInputError("no source files to parse")

    if instruction_counter is None:
        instruction_counter = getattr(engine, "instructions_executed", None)

    cache: dict[bytes, CacheEntry] = {}
    total_seconds = 0.0
    parse_calls = 0

    start_instructions = instruction_counter() if instruction_counter else None
    for iteration in range(iterations):
        iteration_seconds = 0.0
        for source in sources:
            kwargs: dict[str, Any] = {}
            affect_range: AffectRangeCollector | None = None
            if incremental:
                cached = cache.get(source.content)
                if cached is not None and cached.affect_range is not None:
                    affect_range = cached.affect_range
                else:
                    affect_range = AffectRangeCollector()
                kwargs["affect_range"] = affect_range
                if iteration != 0 and cached is not None:
                    kwargs["previous_tree"] = cached.tree
                    kwargs["edits"] = EditSet.empty()

            start = clock()
            try:
                tree = engine.parse(source.content, **kwargs)
            except Exception as exc:
                raise EngineError(source.path, f"{type(exc).__name__}: {exc}") from exc
            elapsed = clock() - start

            iteration_seconds += elapsed
            parse_calls += 1
            cache[source.content] = CacheEntry(tree, affect_range)
        total_seconds += iteration_seconds
        log.debug("iteration %d: %.3fms", iteration + 1, iteration_seconds * 1000)

    instructions: int | None = None
    if instruction_counter and start_instructions is not None:
        delta = instruction_counter() - start_instructions
        # A counter that never moves is an unsupported one.
        if delta != 0:
            instructions = delta

    return PerfReport(
        iterations=iterations,
        file_count=len(sources),
        parse_calls=parse_calls,
        total_seconds=total_seconds,
        instructions=instructions,
    )


def format_report(report: PerfReport) -> str:
    """Format the metric lines printed by the CLI."""
    lines = [f"Time:         {report.mean_milliseconds}ms"]
    if report.mean_instructions is not None:
        lines.append(f"Instructions: {report.mean_instructions}")
    return "\n".join(lines)
