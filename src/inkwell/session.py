"""Editing session: owns the buffer and routes keys, edits and renders."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from inkwell.buffer import Buffer, BufferView, TextEdit
from inkwell.config import Settings
from inkwell.interpreter import KeystrokeInterpreter
from inkwell.keystrokes import KeyResult
from inkwell.render import BlockNode, BlockRenderer
from inkwell.runtime import telemetry


class EventBus:
    """Minimal synchronous event bus between the session and its host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, ())):
            callback(payload)


class EditingSession:
    """One document being written.

    Events emitted on :attr:`bus`:

    ``editor.render``    -- tuple of block nodes after every change
    ``editor.transform`` -- the :class:`KeyResult` of a synthetic edit
    ``editor.save``      -- :class:`BufferView` when the save accelerator fires
    ``editor.load`` / ``editor.clear`` -- :class:`BufferView` after replacement
    """

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        buffer: Optional[Buffer] = None,
        interpreter: Optional[KeystrokeInterpreter] = None,
        renderer: Optional[BlockRenderer] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.buffer = buffer or Buffer()
        self.interpreter = interpreter or KeystrokeInterpreter(
            indent_unit=self.settings.indent_unit
        )
        self.renderer = renderer or BlockRenderer(logger_name="inkwell.render")
        self.bus = bus or EventBus()
        self.logger = telemetry.get_logger("inkwell.session")
        self._nodes: tuple[BlockNode, ...] = self.renderer.render(self.buffer.text)

    @property
    def nodes(self) -> tuple[BlockNode, ...]:
        return self._nodes

    @property
    def text(self) -> str:
        return self.buffer.text

    def handle_key(
        self,
        key: str,
        *,
        modifiers: Iterable[str] = (),
        text: Optional[str] = None,
    ) -> KeyResult:
        """Interpret ``key`` at the current selection and apply the outcome.

        A pass-through key carrying printable ``text`` is inserted over the
        selection here, standing in for the native edit of a host widget.
        """

        selection = self.buffer.selection
        with telemetry.span(
            "session::key",
            component="session",
            metadata={"key": key, "buffer": self.buffer.name},
        ):
            result = self.interpreter.interpret(
                self.buffer.text, selection.start, selection.end, key, modifiers
            )
            if result.status == "save":
                self.bus.emit("editor.save", self.buffer.snapshot())
            elif result.status == "transform" and result.edit is not None:
                self.buffer.apply(result.edit, cursor=result.cursor, label="transform")
                self.bus.emit("editor.transform", result)
                self.render()
            elif text:
                self.buffer.insert_text(text)
                self.render()
        return result

    def apply_edit(self, edit: TextEdit, *, label: str = "host_edit") -> BufferView:
        view = self.buffer.apply(edit, label=label)
        self.render()
        return view

    def sync_from_host(self, text: str, start: int, end: Optional[int] = None) -> BufferView:
        """Adopt text and selection from a host widget that edited natively."""

        if text != self.buffer.text:
            self.buffer.load(text)
            self.buffer.set_selection(start, end)
            self.render()
        else:
            self.buffer.set_selection(start, end)
        return self.buffer.snapshot()

    def load_buffer(self, text: str) -> BufferView:
        view = self.buffer.load(text, cursor_at="end")
        telemetry.record_event(
            "session.load", data={"buffer": self.buffer.name, "length": len(text)}
        )
        self.bus.emit("editor.load", view)
        self.render()
        return view

    def clear_buffer(self) -> BufferView:
        view = self.buffer.clear()
        telemetry.record_event("session.clear", data={"buffer": self.buffer.name})
        self.bus.emit("editor.clear", view)
        self.render()
        return view

    def render(self) -> tuple[BlockNode, ...]:
        self._nodes = self.renderer.render(self.buffer.text)
        self.bus.emit("editor.render", self._nodes)
        return self._nodes


__all__ = ["EditingSession", "EventBus"]
