"""Shared test fixtures and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from syntaxkit.grammar import Child, ChildKind, Keyword, Token, TokenSet
from syntaxkit.harness import SourceFile
from syntaxkit.incremental import AffectRangeCollector, EditSet


def child(
    name: str,
    kind: ChildKind,
    *,
    optional: bool = False,
    unexpected: bool = False,
) -> Child:
    return Child(name, kind, is_optional=optional, is_unexpected_nodes=unexpected)


def tokens(*spellings: str) -> TokenSet:
    """Build a token set of fixed-text tokens, named after their spelling."""
    return TokenSet(tuple(Token(s, literal_text=s) for s in spellings))


def keywords(*names: str) -> TokenSet:
    return TokenSet(tuple(Keyword(n) for n in names))


@dataclass
class ParseCall:
    """Arguments of one recorded FakeEngine.parse call."""

    source: bytes
    kwargs: dict[str, Any]


@dataclass
class FakeEngine:
    """Engine that records every call and returns a fresh tree object."""

    calls: list[ParseCall] = field(default_factory=list)
    trees: list[object] = field(default_factory=list)

    def parse(
        self,
        source: bytes,
        *,
        previous_tree: Any = None,
        edits: EditSet | None = None,
        affect_range: AffectRangeCollector | None = None,
    ) -> object:
        kwargs: dict[str, Any] = {}
        if previous_tree is not None:
            kwargs["previous_tree"] = previous_tree
        if edits is not None:
            kwargs["edits"] = edits
        if affect_range is not None:
            kwargs["affect_range"] = affect_range
        self.calls.append(ParseCall(source, kwargs))
        tree = object()
        self.trees.append(tree)
        return tree


class StepClock:
    """Clock whose successive readings advance by the given durations.

    Each parse call reads the clock twice; the n-th call lasts ``durations[n]``.
    """

    def __init__(self, durations: list[float]) -> None:
        self._readings: list[float] = []
        now = 0.0
        for d in durations:
            self._readings.append(now)
            now += d
            self._readings.append(now)
            now += 100.0  # time outside parse calls must not count
        self._readings.reverse()

    def __call__(self) -> float:
        return self._readings.pop()


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def make_sources():
    """Return a helper building in-memory sources from contents."""

    def _make(*contents: bytes) -> list[SourceFile]:
        return [SourceFile(Path(f"file{i}.py"), c) for i, c in enumerate(contents)]

    return _make
