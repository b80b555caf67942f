"""Grammar model: syntax node children and their token alternatives."""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Token choices
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Keyword:
    """A reserved word, spelled literally."""

    name: str


@dataclass(frozen=True, slots=True)
class Token:
    """A punctuation or operator token.

    Tokens with fixed spelling carry it in ``literal_text``; tokens whose text
    varies (identifiers, literals) only have a ``display_name``.
    """

    display_name: str
    literal_text: str | None = None


TokenChoice = Keyword | Token

# ---------------------------------------------------------------------------
# Child kinds
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NodeRef:
    """Exactly one child of the named node type."""

    node_type_name: str


@dataclass(frozen=True, slots=True)
class NodeChoice:
    """Exactly one of several node-typed alternatives."""

    alternatives: tuple[ChildKind, ...]


@dataclass(frozen=True, slots=True)
class Collection:
    """Zero or more repetitions of the named node type."""

    element_node_type_name: str


@dataclass(frozen=True, slots=True)
class TokenSet:
    """Exactly one token drawn from ``choices``."""

    choices: tuple[TokenChoice, ...]


ChildKind = NodeRef | NodeChoice | Collection | TokenSet

# ---------------------------------------------------------------------------
# Children and nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Child:
    """A named slot on a syntax node."""

    name: str
    kind: ChildKind
    is_optional: bool = False
    # Error-recovery slot; never documented.
    is_unexpected_nodes: bool = False

    @property
    def is_token(self) -> bool:
        return isinstance(self.kind, TokenSet)


@dataclass(frozen=True, slots=True)
class Node:
    """A syntax node type and its ordered children."""

    name: str
    children: tuple[Child, ...] = ()
    documentation: str = ""
