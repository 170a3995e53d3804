"""Markdown block rendering: nodes, the list-stack renderer, HTML export."""

from .blocks import BlockRenderer, ListFrame, ListStack, render_blocks
from .html import node_to_html, render_html
from .nodes import (
    BlockNode,
    Break,
    Heading,
    ListClose,
    ListItem,
    ListKind,
    ListOpen,
    Paragraph,
    is_balanced,
)

__all__ = [
    "BlockNode",
    "BlockRenderer",
    "Break",
    "Heading",
    "ListClose",
    "ListFrame",
    "ListItem",
    "ListKind",
    "ListOpen",
    "ListStack",
    "Paragraph",
    "is_balanced",
    "node_to_html",
    "render_blocks",
    "render_html",
]
