"""Conversions between flat character offsets and ``(row, column)`` pairs.

Hosts such as Textual's ``TextArea`` address text by location while the
engine works in offsets.
"""

from __future__ import annotations

from typing import Tuple

Location = Tuple[int, int]  # (row, column)


def location_to_offset(text: str, location: Location) -> int:
    row, col = location
    lines = text.split("\n")
    row = max(0, min(row, len(lines) - 1))
    offset = 0
    for line in lines[:row]:
        offset += len(line) + 1  # newline
    return offset + max(0, min(col, len(lines[row])))


def offset_to_location(text: str, offset: int) -> Location:
    offset = max(0, min(offset, len(text)))
    before = text[:offset]
    row = before.count("\n")
    line_start = before.rfind("\n") + 1
    return (row, offset - line_start)


__all__ = ["Location", "location_to_offset", "offset_to_location"]
