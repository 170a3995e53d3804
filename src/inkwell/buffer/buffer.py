"""Buffer façade: the document text, its selection, and atomic replacement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from inkwell.runtime import telemetry

from .state import BufferState, Selection
from .sync import BufferView
from .validation import ensure_offset


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``[start, end)`` with ``insert``."""

    start: int
    end: int
    insert: str

    def apply_to(self, text: str) -> str:
        return text[: self.start] + self.insert + text[self.end :]

    @property
    def caret_after(self) -> int:
        return self.start + len(self.insert)


class Buffer:
    def __init__(self, *, name: str = "default", text: str = "") -> None:
        self.name = name
        self._state = BufferState(text=text, selection=Selection.caret(len(text)))

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, text=text)

    @property
    def text(self) -> str:
        return self._state.text

    @property
    def selection(self) -> Selection:
        return self._state.selection

    @property
    def version(self) -> int:
        return self._state.version

    def snapshot(self) -> BufferView:
        state = self._state
        return BufferView(
            version=state.version,
            text=state.text,
            selection=state.selection,
            name=self.name,
        )

    def set_selection(self, start: int, end: Optional[int] = None) -> Selection:
        text = self._state.text
        ensure_offset(text, start)
        ensure_offset(text, start if end is None else end)
        selection = Selection(start, start if end is None else end)
        self._state = BufferState(
            text=text, selection=selection, version=self._state.version
        )
        return selection

    def apply(
        self, edit: TextEdit, *, cursor: Optional[int] = None, label: str = "edit"
    ) -> BufferView:
        """Splice ``edit`` into the text; the caret is placed in the new text."""

        before = self._state
        ensure_offset(before.text, edit.start)
        ensure_offset(before.text, edit.end)
        if edit.start > edit.end:
            raise ValueError("edit start must not exceed end")
        with telemetry.span(
            f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name, "version": before.version},
        ):
            new_text = edit.apply_to(before.text)
            caret = edit.caret_after if cursor is None else cursor
            ensure_offset(new_text, caret)
            self._state = BufferState(
                text=new_text,
                selection=Selection.caret(caret),
                version=before.version + 1,
            )
        return self.snapshot()

    def replace_range(self, start: int, end: int, text: str, *, label: str) -> BufferView:
        return self.apply(TextEdit(start, end, text), label=label)

    def insert_text(self, text: str) -> BufferView:
        selection = self._state.selection
        return self.replace_range(
            selection.start, selection.end, text, label="insert_text"
        )

    def load(
        self, text: str, *, cursor_at: Literal["start", "end"] = "end"
    ) -> BufferView:
        """Replace the whole document; text and caret change in one step."""

        caret = len(text) if cursor_at == "end" else 0
        self._state = BufferState(
            text=text,
            selection=Selection.caret(caret),
            version=self._state.version + 1,
        )
        return self.snapshot()

    def clear(self) -> BufferView:
        return self.load("", cursor_at="start")


__all__ = ["Buffer", "TextEdit"]
