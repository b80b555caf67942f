"""Markdown renderer: turns grammar model values into grammar descriptions."""

from __future__ import annotations

from collections.abc import Iterable

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


def render_token_choice(choice: TokenChoice) -> str:
    """Render one token alternative: `'text'` or `<name>` for unspelled tokens."""
    if isinstance(choice, Keyword):
        return f"`'{choice.name}'`"
    if isinstance(choice, Token):
        if choice.literal_text is not None:
            return f"`'{choice.literal_text}'`"
        return f"`<{choice.display_name}>`"
    return ""


def render_child_kind(kind: ChildKind) -> str:
    """Render the grammar of a child kind, without the optionality marker."""
    if isinstance(kind, NodeRef):
        return _node_reference(kind.node_type_name)
    if isinstance(kind, NodeChoice):
        return _group(render_child_kind(alt) for alt in kind.alternatives)
    if isinstance(kind, Collection):
        # Repetition is not marked; collections read like single references.
        return _node_reference(kind.element_node_type_name)
    if isinstance(kind, TokenSet):
        if len(kind.choices) == 1:
            return render_token_choice(kind.choices[0])
        return _group(render_token_choice(c) for c in kind.choices)
    return ""


def render_child(child: Child) -> str:
    """Render a child's grammar, with a trailing ``?`` when it is optional."""
    text = render_child_kind(child.kind)
    if child.is_optional:
        return text + "?"
    return text


def render_children_list(children: Iterable[Child]) -> str:
    """Render a markdown bullet list of children and their grammar.

    Unexpected-nodes placeholders are skipped. Returns an empty string when
    nothing is left to list.
    """
    return "\n".join(
        f" - `{child.name}`: {render_child(child)}"
        for child in children
        if not child.is_unexpected_nodes
    )


def render_token_choices(child: Child) -> str:
    """Render the token alternatives of a token-kinded child.

    A single choice is returned inline with one leading space; several choices
    become bullet lines. Children of any other kind yield an empty string.
    """
    kind = child.kind
    if not isinstance(kind, TokenSet):
        return ""
    if len(kind.choices) == 1:
        return " " + render_token_choice(kind.choices[0])
    return "\n".join(f" - {render_token_choice(c)}" for c in kind.choices)


# ---------------------------------------------------------------------------
# Node documentation blocks
# ---------------------------------------------------------------------------


def render_node_doc(node: Node) -> str:
    """Render the documentation block for one node type."""
    sections: list[str] = []

    documentation = node.documentation.strip()
    if documentation:
        sections.append(documentation)

    children = render_children_list(node.children)
    if children:
        sections.append(f"### Children\n\n{children}")

    token_lines = [
        _token_guarantee(child)
        for child in node.children
        if child.is_token and not child.is_unexpected_nodes
    ]
    if token_lines:
        sections.append("### Tokens\n\n" + "\n".join(token_lines))

    return "\n\n".join(sections)


def render_catalog(nodes: Iterable[Node]) -> str:
    """Render every node under its own ``##`` heading."""
    blocks: list[str] = []
    for node in nodes:
        doc = render_node_doc(node)
        if doc:
            blocks.append(f"## {node.name}\n\n{doc}")
        else:
            blocks.append(f"## {node.name}")
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _node_reference(type_name: str) -> str:
    return f"``{type_name}``"


def _group(parts: Iterable[str]) -> str:
    return "(" + " | ".join(parts) + ")"


def _token_guarantee(child: Child) -> str:
    prefix = f"For `{child.name}`, this is guaranteed to be"
    choices = render_token_choices(child)
    if isinstance(child.kind, TokenSet) and len(child.kind.choices) > 1:
        return f"{prefix} one of the following kinds:\n{choices}"
    return f"{prefix}{choices}."
