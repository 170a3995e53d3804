"""Key requests handed to authoring actions and the results they return."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from inkwell.buffer import TextEdit
from inkwell.config import DEFAULT_INDENT_UNIT
from inkwell.keymaps.models import KeyStroke

REQUEST_SAVE = "request_save"


@dataclass(frozen=True, slots=True)
class KeyRequest:
    """One key event against one buffer version."""

    text: str
    start: int
    end: int
    stroke: KeyStroke
    indent_unit: str = DEFAULT_INDENT_UNIT


@dataclass(frozen=True, slots=True)
class KeyResult:
    """Outcome of interpreting a key.

    ``pass`` leaves the native edit to the host. ``transform`` carries the
    synthesized edit, the resulting text and the caret offset in that text.
    ``save`` suppresses the keystroke and raises ``signal``.
    """

    consumed: bool
    status: Literal["pass", "transform", "save"] = "pass"
    edit: Optional[TextEdit] = None
    text: Optional[str] = None
    cursor: Optional[int] = None
    signal: Optional[str] = None

    @classmethod
    def passthrough(cls) -> "KeyResult":
        return cls(consumed=False)

    @classmethod
    def transform(cls, source: str, edit: TextEdit, cursor: int) -> "KeyResult":
        return cls(
            consumed=True,
            status="transform",
            edit=edit,
            text=edit.apply_to(source),
            cursor=cursor,
        )

    @classmethod
    def request_save(cls) -> "KeyResult":
        return cls(consumed=True, status="save", signal=REQUEST_SAVE)


__all__ = ["KeyRequest", "KeyResult", "REQUEST_SAVE"]
