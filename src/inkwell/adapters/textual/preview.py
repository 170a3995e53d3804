"""Map rendered block nodes onto Rich text for the preview pane."""

from __future__ import annotations

from typing import Iterable, List

from rich.text import Text

from inkwell.render import (
    BlockNode,
    Break,
    Heading,
    ListClose,
    ListItem,
    ListKind,
    ListOpen,
    Paragraph,
)

HEADING_STYLES = {1: "bold underline", 2: "bold", 3: "bold italic"}


def nodes_to_rich(nodes: Iterable[BlockNode]) -> Text:
    """Lay nodes out one row each; list items are indented by nesting depth."""

    rows: List[Text] = []
    # one counter per open list; ``None`` for unordered
    counters: List[int | None] = []

    def row(content: Text | str, style: str = "") -> None:
        rows.append(content if isinstance(content, Text) else Text(content, style=style))

    for node in nodes:
        if isinstance(node, Heading):
            row(node.text, HEADING_STYLES[node.level])
        elif isinstance(node, Paragraph):
            row(node.text)
        elif isinstance(node, Break):
            row("")
        elif isinstance(node, ListOpen):
            counters.append(0 if node.kind is ListKind.ORDERED else None)
        elif isinstance(node, ListClose):
            if counters:
                counters.pop()
        elif isinstance(node, ListItem):
            depth = max(len(counters) - 1, 0)
            marker = "•"
            if counters and counters[-1] is not None:
                counters[-1] = (counters[-1] or 0) + 1
                marker = f"{counters[-1]}."
            line = Text("  " * depth)
            line.append(marker, style="dim")
            line.append(f" {node.text}")
            row(line)
    return Text("\n").join(rows)


__all__ = ["HEADING_STYLES", "nodes_to_rich"]
