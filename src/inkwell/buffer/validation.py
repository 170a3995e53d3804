"""Offset validation shared by buffer operations."""

from __future__ import annotations

from .sync import BufferValidationError


def ensure_offset(text: str, offset: int) -> int:
    if offset < 0 or offset > len(text):
        raise BufferValidationError(
            f"Offset {offset} outside buffer of length {len(text)}", offset=offset
        )
    return offset
