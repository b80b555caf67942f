"""Parsing engine adapters and engine lookup by name.

Neither shipped engine exposes an instruction counter; engines loaded as
``MODULE:ATTR`` may provide ``instructions_executed()``.
"""

from __future__ import annotations

import ast
import importlib
import logging
from typing import Any

from syntaxkit.errors import InvalidInputError
from syntaxkit.incremental import AffectRangeCollector, EditSet, ParseEngine

log = logging.getLogger(__name__)


class PythonAstEngine:
    """Parses Python source with the standard library ``ast`` module.

    ``ast`` has no incremental mode, so previous trees and edits are ignored.
    """

    name = "python"

    def parse(
        self,
        source: bytes,
        *,
        previous_tree: Any = None,
        edits: EditSet | None = None,
        affect_range: AffectRangeCollector | None = None,
    ) -> ast.Module:
        return ast.parse(source)


class TreeSitterEngine:
    """Parses with tree-sitter using a grammar package such as ``tree_sitter_python``.

    The previous tree is handed to tree-sitter as ``old_tree``. The ranges that
    differ between the old and new tree are recorded into the collector.
    """

    def __init__(self, language_module: str) -> None:
        try:
            from tree_sitter import Language, Parser
        except ImportError as exc:
            raise InvalidInputError(
                "tree-sitter engine requires the 'tree-sitter' extra"
            ) from exc
        try:
            grammar = importlib.import_module(language_module)
        except ImportError as exc:
            raise InvalidInputError(f"cannot import grammar module {language_module!r}") from exc

        self.name = f"tree-sitter:{language_module}"
        try:
            language = Language(grammar.language())
        except (AttributeError, TypeError, ValueError) as exc:
            raise InvalidInputError(
                f"{language_module!r} is not a tree-sitter grammar module"
            ) from exc
        self._parser = Parser(language)

    def parse(
        self,
        source: bytes,
        *,
        previous_tree: Any = None,
        edits: EditSet | None = None,
        affect_range: AffectRangeCollector | None = None,
    ) -> Any:
        if previous_tree is None:
            tree = self._parser.parse(source)
        else:
            tree = self._parser.parse(source, previous_tree)
        if affect_range is not None and previous_tree is not None:
            for changed in previous_tree.changed_ranges(tree):
                affect_range.record(changed.start_byte, changed.end_byte)
        return tree


def load_engine(spec: str) -> ParseEngine:
    """Resolve an engine spec.

    Accepted forms: ``python``, ``tree-sitter:<grammar module>``, or
    ``package.module:attribute`` where the attribute is an engine instance, or a
    class or factory called without arguments.
    """
    if spec == "python":
        engine: Any = PythonAstEngine()
    elif spec.startswith("tree-sitter:"):
        engine = TreeSitterEngine(spec.partition(":")[2])
    elif ":" in spec:
        engine = _load_from_module(spec)
    else:
        raise InvalidInputError(f"unknown engine: {spec!r}")

    if not isinstance(engine, ParseEngine):
        raise InvalidInputError(f"engine {spec!r} has no parse() method")
    log.debug("using engine %s", spec)
    return engine


def _load_from_module(spec: str) -> Any:
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise InvalidInputError(f"invalid engine spec (expected MODULE:ATTR): {spec!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise InvalidInputError(f"cannot import engine module {module_name!r}") from exc
    try:
        target = getattr(module, attr)
    except AttributeError:
        raise InvalidInputError(f"module {module_name!r} has no attribute {attr!r}") from None
    if isinstance(target, type):
        return target()
    if isinstance(target, ParseEngine):
        return target
    if callable(target):
        return target()
    return target
