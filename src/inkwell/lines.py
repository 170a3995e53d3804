"""Line lookups and list-marker patterns shared by keystroke actions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Optional

UNORDERED_MARKER = re.compile(r"^(?P<indent>\s*)(?P<bullet>[-*])(?P<gap>\s+)")
ORDERED_MARKER = re.compile(r"^(?P<indent>\s*)(?P<number>\d+)\.(?P<gap>\s+)")


@dataclass(frozen=True, slots=True)
class ListMarker:
    kind: Literal["ordered", "unordered"]
    indent: str
    bullet: str = ""
    number: int = 0

    def next_marker(self) -> str:
        """Marker text for the item that follows this one."""

        if self.kind == "ordered":
            return f"{self.indent}{self.number + 1}. "
        return f"{self.indent}{self.bullet} "


def current_line(text: str, offset: int) -> str:
    """Text from the last line break before ``offset`` up to ``offset``."""

    head = text[:offset]
    return head[head.rfind("\n") + 1 :]


def match_list_marker(line: str) -> Optional[ListMarker]:
    ordered = ORDERED_MARKER.match(line)
    if ordered:
        return ListMarker(
            kind="ordered",
            indent=ordered.group("indent"),
            number=int(ordered.group("number")),
        )
    unordered = UNORDERED_MARKER.match(line)
    if unordered:
        return ListMarker(
            kind="unordered",
            indent=unordered.group("indent"),
            bullet=unordered.group("bullet"),
        )
    return None


__all__ = [
    "ListMarker",
    "ORDERED_MARKER",
    "UNORDERED_MARKER",
    "current_line",
    "match_list_marker",
]
