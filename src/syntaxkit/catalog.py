"""Grammar catalog loading from TOML."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from syntaxkit.errors import CatalogError
from syntaxkit.grammar import (
    Child,
    ChildKind,
    Collection,
    Keyword,
    Node,
    NodeChoice,
    NodeRef,
    Token,
    TokenChoice,
    TokenSet,
)

log = logging.getLogger(__name__)

_KIND_KEYS = ("node", "choices", "collection", "token")


def load_catalog(path: Path) -> list[Node]:
    """Read a TOML grammar catalog file and return its nodes in file order."""
    source = str(path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as exc:
        raise CatalogError(f"cannot read catalog: {exc.strerror or exc}", source) from exc
    except tomllib.TOMLDecodeError as exc:
        raise CatalogError(f"invalid TOML: {exc}", source) from exc
    except UnicodeDecodeError as exc:
        raise CatalogError(f"invalid UTF-8: {exc.reason}", source) from exc
    nodes = parse_catalog(data, source)
    log.debug("loaded %d node(s) from %s", len(nodes), source)
    return nodes


def parse_catalog(data: dict[str, Any], source: str = "<catalog>") -> list[Node]:
    """Build grammar model values from already-decoded catalog data."""
    raw_nodes = data.get("node", [])
    if not isinstance(raw_nodes, list):
        raise CatalogError("'node' must be an array of tables", source)
    return [_parse_node(raw, source, f"node[{i}]") for i, raw in enumerate(raw_nodes)]


# ---------------------------------------------------------------------------
# Nodes and children
# ---------------------------------------------------------------------------


def _parse_node(raw: Any, source: str, where: str) -> Node:
    if not isinstance(raw, dict):
        raise CatalogError("node must be a table", source, where)
    name = _require_str(raw, "name", source, where)
    where = f"node {name!r}"

    documentation = raw.get("documentation", "")
    if not isinstance(documentation, str):
        raise CatalogError("'documentation' must be a string", source, where)

    raw_children = raw.get("child", [])
    if not isinstance(raw_children, list):
        raise CatalogError("'child' must be an array of tables", source, where)

    children = tuple(
        _parse_child(c, source, where, i) for i, c in enumerate(raw_children)
    )
    return Node(name=name, children=children, documentation=documentation)


def _parse_child(raw: Any, source: str, node_where: str, index: int) -> Child:
    where = f"{node_where}, child[{index}]"
    if not isinstance(raw, dict):
        raise CatalogError("child must be a table", source, where)
    name = _require_str(raw, "name", source, where)
    where = f"{node_where}, child {name!r}"

    kind = _parse_kind(raw, source, where)
    return Child(
        name=name,
        kind=kind,
        is_optional=_optional_bool(raw, "optional", source, where),
        is_unexpected_nodes=_optional_bool(raw, "unexpected", source, where),
    )


# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------


def _parse_kind(raw: dict[str, Any], source: str, where: str) -> ChildKind:
    present = [k for k in _KIND_KEYS if k in raw]
    if len(present) != 1:
        expected = ", ".join(repr(k) for k in _KIND_KEYS)
        raise CatalogError(f"expected exactly one of {expected}", source, where)
    key = present[0]
    value = raw[key]

    if key == "node":
        return NodeRef(_as_str(value, key, source, where))
    if key == "collection":
        return Collection(_as_str(value, key, source, where))
    if key == "choices":
        if not isinstance(value, list) or not value:
            raise CatalogError("'choices' must be a non-empty array", source, where)
        return NodeChoice(tuple(_parse_alternative(v, source, where) for v in value))
    if not isinstance(value, list) or not value:
        raise CatalogError("'token' must be a non-empty array", source, where)
    return TokenSet(tuple(_parse_token_choice(v, source, where) for v in value))


def _parse_alternative(value: Any, source: str, where: str) -> ChildKind:
    if isinstance(value, str):
        return NodeRef(value)
    if isinstance(value, dict):
        return _parse_kind(value, source, where)
    raise CatalogError("choice must be a node type name or a table", source, where)


def _parse_token_choice(value: Any, source: str, where: str) -> TokenChoice:
    if not isinstance(value, dict):
        raise CatalogError("token choice must be a table", source, where)
    if "keyword" in value:
        return Keyword(_as_str(value["keyword"], "keyword", source, where))
    name = _require_str(value, "name", source, where)
    text = value.get("text")
    if text is not None and not isinstance(text, str):
        raise CatalogError("'text' must be a string", source, where)
    return Token(display_name=name, literal_text=text)


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def _require_str(raw: dict[str, Any], key: str, source: str, where: str) -> str:
    if key not in raw:
        raise CatalogError(f"missing required key {key!r}", source, where)
    return _as_str(raw[key], key, source, where)


def _as_str(value: Any, key: str, source: str, where: str) -> str:
    if not isinstance(value, str) or not value:
        raise CatalogError(f"{key!r} must be a non-empty string", source, where)
    return value


def _optional_bool(raw: dict[str, Any], key: str, source: str, where: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise CatalogError(f"{key!r} must be a boolean", source, where)
    return value
