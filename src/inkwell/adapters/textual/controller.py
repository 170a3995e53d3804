"""Headless bridge between Textual key events and an EditingSession."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from inkwell.buffer import BufferView
from inkwell.keymaps import KeyStroke
from inkwell.keystrokes import KeyResult
from inkwell.render import BlockNode
from inkwell.session import EditingSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class AuthoringUIHooks:
    """Callbacks the controller uses to update widgets."""

    update_buffer: Callable[[BufferView], None]
    update_preview: Callable[[tuple[BlockNode, ...]], None] = _noop
    update_status: Callable[[str], None] = _noop
    request_save: Callable[[BufferView], None] = _noop
    log: Callable[[str], None] = _noop


# Textual spells modifier chords as ``ctrl+s``; bare names map to engine keys.
_TEXTUAL_KEYS = {
    "enter": "enter",
    "return": "enter",
    "tab": "tab",
    "escape": "escape",
}


def split_textual_key(key: str) -> tuple[str, tuple[str, ...]]:
    """``"ctrl+s"`` -> ``("s", ("ctrl",))``."""

    if key == "+" or "+" not in key:
        return _TEXTUAL_KEYS.get(key, key), ()
    *mods, base = key.split("+")
    return _TEXTUAL_KEYS.get(base, base), tuple(mods)


class AuthoringController:
    """Feeds host keys to the session and pushes results back to the UI."""

    def __init__(self, session: EditingSession, hooks: AuthoringUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> KeyResult:
        base, chord = split_textual_key(key)
        mods = tuple(dict.fromkeys((*chord, *(str(m).lower() for m in modifiers))))
        self._log("key ->", key=base, mods=mods, text=text)
        result = self.session.handle_key(base, modifiers=mods, text=text)
        self._log(
            "result <-",
            status=result.status,
            consumed=result.consumed,
            cursor=result.cursor,
        )
        if result.status != "pass":
            self.hooks.update_status(result.status)
        self.hooks.update_buffer(self.session.buffer.snapshot())
        return result

    def claims_key(self, key: str) -> bool:
        """True when a binding answers ``key``; the host then defers to the engine."""

        base, chord = split_textual_key(key)
        resolver = self.session.interpreter.keymap_resolver
        return resolver.resolve(KeyStroke(base, chord)).status == "match"

    def sync_from_host(self, text: str, start: int, end: Optional[int] = None) -> None:
        """Mirror a native widget edit and report the new buffer to the UI."""

        self.session.sync_from_host(text, start, end)
        self.hooks.update_buffer(self.session.buffer.snapshot())

    def load(self, text: str) -> None:
        self.session.load_buffer(text)
        self.hooks.update_buffer(self.session.buffer.snapshot())

    def clear(self) -> None:
        self.session.clear_buffer()
        self.hooks.update_buffer(self.session.buffer.snapshot())

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        bus.subscribe("editor.render", self._on_render)
        bus.subscribe("editor.save", self._on_save)
        for event in ("editor.load", "editor.clear", "editor.transform"):
            bus.subscribe(
                event, lambda payload, name=event: self._log("event ->", event=name)
            )

    def _on_render(self, payload: object) -> None:
        if isinstance(payload, tuple):
            self.hooks.update_preview(payload)

    def _on_save(self, payload: object) -> None:
        if isinstance(payload, BufferView):
            self._log("event ->", event="editor.save", version=payload.version)
            self.hooks.request_save(payload)

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.session.buffer.snapshot())
        self.hooks.update_preview(self.session.nodes)

    def _log(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "buffer": self.session.buffer.name,
            "version": self.session.buffer.version,
            "selection": (
                self.session.buffer.selection.start,
                self.session.buffer.selection.end,
            ),
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["AuthoringController", "AuthoringUIHooks", "split_textual_key"]
