"""Executable Textual app hosting the authoring engine."""

from __future__ import annotations

import argparse
import os
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical, VerticalScroll
    from textual.screen import ModalScreen
    from textual.widgets import Footer, Header, Input, Label, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use inkwell.adapters.textual.app"
    ) from exc

from inkwell.audio import AudioPlaybackError, AudioPlayer
from inkwell.buffer import BufferView, location_to_offset, offset_to_location
from inkwell.config import Settings, Theme
from inkwell.notifications import NotificationQueue
from inkwell.render import BlockNode
from inkwell.runtime import telemetry
from inkwell.session import EditingSession
from inkwell.storage import (
    PreferenceStore,
    Preferences,
    SessionStore,
    SessionStoreError,
    WritingSession,
)
from inkwell.timer import CountdownTimer

from .controller import AuthoringController, AuthoringUIHooks
from .preview import nodes_to_rich

def delete_saved_session(store: SessionStore, name: str) -> tuple[str, str]:
    """Delete ``name`` and return the notification ``(message, kind)``."""

    try:
        return store.delete(name), "success"
    except (SessionStoreError, ValueError) as exc:
        return f"Error deleting file: {exc}", "error"


class AuthoringTextArea(TextArea):
    """TextArea that lets the engine claim Tab, Enter and the save chord."""

    controller: AuthoringController | None = None

    def selection_offsets(self) -> tuple[int, int]:
        text = self.text
        start = location_to_offset(text, self.selection.start)
        end = location_to_offset(text, self.selection.end)
        return (start, end) if start <= end else (end, start)

    async def _on_key(self, event: events.Key) -> None:
        if self.controller is None or not self.controller.claims_key(event.key):
            await super()._on_key(event)
            return

        start, end = self.selection_offsets()
        self.controller.sync_from_host(self.text, start, end)
        result = self.controller.handle_textual_key(event.key)
        if not result.consumed:
            await super()._on_key(event)
            return

        event.stop()
        event.prevent_default()
        if result.status == "transform" and result.edit is not None:
            before = self.text
            self.replace(
                result.edit.insert,
                offset_to_location(before, result.edit.start),
                offset_to_location(before, result.edit.end),
            )
            if result.cursor is not None:
                self.move_cursor(offset_to_location(self.text, result.cursor))


class SessionNamePrompt(ModalScreen[Optional[str]]):
    """Ask for the name a session is saved or opened under."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, title: str, suggestions: Sequence[str] = ()) -> None:
        super().__init__()
        self._title = title
        self._suggestions = tuple(suggestions)

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt"):
            yield Label(self._title)
            if self._suggestions:
                yield Label(", ".join(self._suggestions), id="prompt-suggestions")
            yield Input(placeholder="session name", id="prompt-input")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value.strip() or None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class InkwellApp(App[None]):
    """Writing surface: editor on the left, rendered preview on the right."""

    CSS = """
	#workspace {
		height: 1fr;
	}

	#editor {
		width: 1fr;
		border: round $accent;
	}

	#preview-scroll {
		width: 1fr;
		border: round $surface-lighten-2;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#prompt {
		width: 60;
		height: auto;
		padding: 1 2;
		border: round $accent;
		background: $surface;
	}

	SessionNamePrompt {
		align: center middle;
	}
	"""

    BINDINGS = [
        ("ctrl+n", "new_session", "New"),
        ("ctrl+o", "open_session", "Open"),
        ("f4", "delete_session", "Delete"),
        ("f5", "toggle_timer", "Timer"),
        ("f6", "adjust_timer(-1)", "Timer -"),
        ("f7", "adjust_timer(1)", "Timer +"),
        ("f8", "toggle_theme", "Theme"),
        ("f9", "font_size(-1)", "Size -"),
        ("f10", "font_size(1)", "Size +"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        open_session: Optional[str] = None,
        sound: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or Settings.from_env()
        self.sessions = SessionStore(self.settings.sessions_dir)
        self.preference_store = PreferenceStore(self.settings.preferences_path)
        self.preferences = Preferences()
        self.notifications = NotificationQueue(
            default_duration_ms=self.settings.notification_ms
        )
        self.timer = CountdownTimer(
            self.settings.timer_minutes, on_expire=self._on_timer_expired
        )
        self.session = EditingSession(settings=self.settings)
        self.audio = AudioPlayer()
        self._sound = sound
        self.controller: AuthoringController | None = None
        self.logger = telemetry.get_logger("inkwell.app")
        self._open_session = open_session
        self._editor: AuthoringTextArea | None = None
        self._preview: Static | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="workspace"):
            self._editor = AuthoringTextArea(
                id="editor", soft_wrap=True, tab_behavior="indent"
            )
            yield self._editor
            with VerticalScroll(id="preview-scroll"):
                self._preview = Static("", id="preview")
                yield self._preview
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        self.preferences = self.preference_store.load()
        self._apply_theme()
        hooks = AuthoringUIHooks(
            update_buffer=self._update_buffer,
            update_preview=self._update_preview,
            update_status=lambda status: self._refresh_status(),
            request_save=self._request_save,
            log=lambda line: self.logger.debug(line),
        )
        self.controller = AuthoringController(self.session, hooks)
        if self._editor is not None:
            self._editor.controller = self.controller
        self._load_text(self.preferences.editor_content)
        if self._open_session:
            self._load_session(self._open_session)
        self.set_interval(1.0, self._tick)
        self._refresh_status()

    def on_unmount(self) -> None:
        self.audio.stop()
        self._store_preferences()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.controller is None or event.text_area is not self._editor:
            return
        start, end = self._editor.selection_offsets()
        self.controller.sync_from_host(self._editor.text, start, end)

    # --- hooks ---------------------------------------------------------------
    def _update_buffer(self, view: BufferView) -> None:
        self.preferences = replace(self.preferences, editor_content=view.text)

    def _update_preview(self, nodes: tuple[BlockNode, ...]) -> None:
        if self._preview is not None:
            self._preview.update(nodes_to_rich(nodes))

    def _request_save(self, view: BufferView) -> None:
        def _save(name: Optional[str]) -> None:
            if not name:
                return
            session = WritingSession(
                name=name,
                text=view.text,
                font=self.preferences.font,
                font_size=self.preferences.font_size,
                theme=self.preferences.theme,
            )
            try:
                message = self.sessions.save(session)
            except (SessionStoreError, ValueError) as exc:
                self._notify(f"Error saving file: {exc}", "error")
                return
            self._notify(message, "success")

        self.push_screen(SessionNamePrompt("Save session as"), _save)

    # --- actions -------------------------------------------------------------
    def action_new_session(self) -> None:
        if self.controller is not None:
            self.controller.clear()
        if self._editor is not None:
            self._editor.load_text("")
        self._notify("New session", "info")

    def action_open_session(self) -> None:
        names = self.sessions.list()
        if not names:
            self._notify("No saved sessions found", "info")
            return

        def _open(name: Optional[str]) -> None:
            if name:
                self._load_session(name)

        self.push_screen(SessionNamePrompt("Open session", names), _open)

    def action_delete_session(self) -> None:
        names = self.sessions.list()
        if not names:
            self._notify("No saved sessions found", "info")
            return

        def _delete(name: Optional[str]) -> None:
            if name:
                message, kind = delete_saved_session(self.sessions, name)
                self._notify(message, kind)

        self.push_screen(SessionNamePrompt("Delete session", names), _delete)

    def action_toggle_timer(self) -> None:
        self.timer.toggle()
        self._refresh_status()

    def action_adjust_timer(self, delta: int) -> None:
        self.timer.adjust(delta)
        self._refresh_status()

    def action_toggle_theme(self) -> None:
        self.preferences = self.preferences.toggle_theme()
        self._apply_theme()
        self._store_preferences()

    def action_font_size(self, delta: int) -> None:
        self.preferences = self.preferences.step_font_size(delta)
        self._store_preferences()
        self._refresh_status()

    # --- helpers -------------------------------------------------------------
    def _load_text(self, text: str) -> None:
        if self.controller is not None:
            self.controller.load(text)
        if self._editor is not None:
            self._editor.load_text(text)
            self._editor.move_cursor(offset_to_location(text, len(text)))

    def _load_session(self, name: str) -> None:
        try:
            stored = self.sessions.load(name)
        except (SessionStoreError, ValueError) as exc:
            self._notify(f"Error loading file: {exc}", "error")
            return
        self.preferences = Preferences(
            theme=stored.theme,
            font=stored.font,
            editor_content=stored.text,
        ).with_font_size(stored.font_size)
        self._apply_theme()
        self._load_text(stored.text)
        self._notify(f"Loaded '{stored.name}'", "success")

    def _apply_theme(self) -> None:
        dark = self.preferences.theme == Theme.DARK.value
        self.theme = "textual-dark" if dark else "textual-light"

    def _store_preferences(self) -> None:
        try:
            self.preference_store.save(self.preferences)
        except OSError as exc:
            self._notify(f"Error saving preferences: {exc}", "error")

    def _notify(self, message: str, kind: str) -> None:
        self.notifications.push(message, kind)
        telemetry.record_event("app.notify", data={"kind": kind, "message": message})
        self._refresh_status()

    def _on_timer_expired(self) -> None:
        self._notify("Time is up", "info")
        if not self._sound:
            self.bell()
            return
        try:
            self.audio.play(self._sound)
        except AudioPlaybackError as exc:
            self._notify(str(exc), "error")

    def _tick(self) -> None:
        self.timer.tick()
        self.notifications.expire()
        self._refresh_status()

    def _refresh_status(self) -> None:
        if self._status is None:
            return
        parts = [
            f"{self.preferences.font} {self.preferences.font_size}px",
            f"timer {self.timer.display()}{' ▶' if self.timer.running else ''}",
        ]
        active = self.notifications.active()
        if active:
            latest = active[-1]
            parts.append(f"[{latest.kind}] {latest.message}")
        self._status.update("  •  ".join(parts))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the inkwell writing surface.")
    parser.add_argument(
        "--data-dir",
        default=os.environ.get("INKWELL_DATA_DIR"),
        help="Directory holding saved sessions and preferences",
    )
    parser.add_argument(
        "--session",
        default=None,
        help="Name of a saved session to open on start",
    )
    parser.add_argument(
        "--sound",
        default=None,
        help="Audio file played when the writing timer runs out",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = Settings.from_env()
    if args.data_dir:
        settings = replace(settings, data_dir=Path(args.data_dir).expanduser())
    telemetry.configure(preset="quiet")
    InkwellApp(
        settings=settings, open_session=args.session, sound=args.sound
    ).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
