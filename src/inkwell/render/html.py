"""HTML fragment export for rendered block nodes."""

from __future__ import annotations

from html import escape
from typing import Iterable

from .nodes import BlockNode, Break, Heading, ListClose, ListItem, ListOpen, Paragraph


def node_to_html(node: BlockNode) -> str:
    if isinstance(node, Heading):
        tag = f"h{node.level}"
        return f'<{tag} class="text-{tag}">{escape(node.text)}</{tag}>'
    if isinstance(node, Paragraph):
        return f'<p class="text-body">{escape(node.text)}</p>'
    if isinstance(node, Break):
        return "<br />"
    if isinstance(node, ListOpen):
        tag = node.kind.tag
        return f'<{tag} class="markdown-{tag}">'
    if isinstance(node, ListItem):
        return f'<li class="markdown-li">{escape(node.text)}</li>'
    if isinstance(node, ListClose):
        return f"</{node.kind.tag}>"
    raise TypeError(f"Unknown block node {node!r}")


def render_html(nodes: Iterable[BlockNode]) -> str:
    return "".join(node_to_html(node) for node in nodes)


__all__ = ["node_to_html", "render_html"]
