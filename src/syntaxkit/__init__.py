"""Grammar documentation rendering and parser benchmarking tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from syntaxkit.grammar import Node

__version__ = "0.1.0"


def render_grammar(nodes: list[Node]) -> str:
    """Render grammar catalog nodes to a markdown document."""
    from syntaxkit.render import render_catalog

    return render_catalog(nodes)
