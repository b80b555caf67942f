"""Interface between the performance harness and a parsing engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class SourceEdit:
    """Replacement of ``length`` bytes at ``offset`` by ``replacement_length`` bytes."""

    offset: int
    length: int
    replacement_length: int


@dataclass(frozen=True, slots=True)
class EditSet:
    """Edits applied to the previous source to obtain the current one."""

    edits: tuple[SourceEdit, ...] = ()

    @classmethod
    def empty(cls) -> EditSet:
        return cls()

    def __len__(self) -> int:
        return len(self.edits)


@dataclass(slots=True)
class AffectRangeCollector:
    """Collects byte ranges touched by an incremental reparse."""

    ranges: list[tuple[int, int]] = field(default_factory=list)

    def record(self, start: int, end: int) -> None:
        self.ranges.append((start, end))

    def clear(self) -> None:
        self.ranges.clear()


@runtime_checkable
class ParseEngine(Protocol):
    """A parser the harness can drive.

    Engines may also provide ``instructions_executed() -> int`` when the host
    exposes an instruction counter.
    """

    def parse(
        self,
        source: bytes,
        *,
        previous_tree: Any = None,
        edits: EditSet | None = None,
        affect_range: AffectRangeCollector | None = None,
    ) -> Any: ...
