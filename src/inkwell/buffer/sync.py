"""Boundary types exchanged with hosts that render the buffer."""

from __future__ import annotations

from dataclasses import dataclass

from .state import Selection


@dataclass(frozen=True, slots=True)
class BufferView:
    """Host-friendly snapshot of the buffer at one version."""

    version: int
    text: str
    selection: Selection
    name: str = "default"

    @property
    def cursor(self) -> int:
        return self.selection.end


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer an offset outside its text."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
