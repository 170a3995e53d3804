from __future__ import annotations

from pathlib import Path
from typing import List

from inkwell.adapters.textual import (
    AuthoringController,
    AuthoringUIHooks,
    nodes_to_rich,
    split_textual_key,
)
from inkwell.buffer import Buffer, BufferView
from inkwell.render import BlockNode, render_blocks
from inkwell.session import EditingSession
from inkwell.storage import SessionStore, WritingSession


def make_session(text: str = "") -> EditingSession:
    return EditingSession(buffer=Buffer(text=text))


def test_split_textual_key() -> None:
    assert split_textual_key("ctrl+s") == ("s", ("ctrl",))
    assert split_textual_key("tab") == ("tab", ())
    assert split_textual_key("+") == ("+", ())
    assert split_textual_key("shift+enter") == ("enter", ("shift",))


def test_controller_pushes_initial_state() -> None:
    buffers: List[str] = []
    previews: List[tuple[BlockNode, ...]] = []
    hooks = AuthoringUIHooks(
        update_buffer=lambda view: buffers.append(view.text),
        update_preview=lambda nodes: previews.append(nodes),
    )

    AuthoringController(make_session("# Hi"), hooks)

    assert buffers == ["# Hi"]
    assert previews == [render_blocks("# Hi")]


def test_controller_updates_buffer_and_status() -> None:
    buffers: List[str] = []
    statuses: List[str] = []
    hooks = AuthoringUIHooks(
        update_buffer=lambda view: buffers.append(view.text),
        update_status=lambda status: statuses.append(status),
    )
    controller = AuthoringController(make_session("1. first"), hooks)

    result = controller.handle_textual_key("enter")

    assert result.status == "transform"
    assert buffers[-1] == "1. first\n2. "
    assert statuses == ["transform"]


def test_controller_relays_save_request() -> None:
    saved: List[BufferView] = []
    statuses: List[str] = []
    hooks = AuthoringUIHooks(
        update_buffer=lambda view: None,
        update_status=lambda status: statuses.append(status),
        request_save=saved.append,
    )
    controller = AuthoringController(make_session("draft"), hooks)

    controller.handle_textual_key("ctrl+s")

    assert [view.text for view in saved] == ["draft"]
    assert statuses == ["save"]


def test_controller_syncs_host_edits_and_logs() -> None:
    previews: List[tuple[BlockNode, ...]] = []
    lines: List[str] = []
    hooks = AuthoringUIHooks(
        update_buffer=lambda view: None,
        update_preview=previews.append,
        log=lines.append,
    )
    controller = AuthoringController(make_session(), hooks)

    controller.sync_from_host("- a", 3)
    controller.handle_textual_key("tab")

    assert controller.session.text == "- a  "
    assert previews[-1] == render_blocks("- a  ")
    assert any(line.startswith("key -> ") for line in lines)
    assert any("status='transform'" in line for line in lines)


def test_controller_load_and_clear() -> None:
    buffers: List[str] = []
    hooks = AuthoringUIHooks(update_buffer=lambda view: buffers.append(view.text))
    controller = AuthoringController(make_session("x"), hooks)

    controller.load("loaded")
    controller.clear()

    assert buffers == ["x", "loaded", ""]
    assert controller.session.buffer.selection.start == 0


def test_nodes_to_rich_layout() -> None:
    text = nodes_to_rich(render_blocks("# Title\n1. one\n  - inner\n\nbody"))

    assert text.plain.split("\n") == [
        "Title",
        "1. one",
        "  • inner",
        "",
        "body",
    ]


def test_nodes_to_rich_numbers_each_list_from_one() -> None:
    text = nodes_to_rich(render_blocks("1. a\n  1. b\n  2. c"))

    assert text.plain.split("\n") == ["1. a", "  1. b", "  1. c"]


def test_app_arguments() -> None:
    from inkwell.adapters.textual.app import _parse_args

    args = _parse_args(["--session", "morning", "--sound", "rain.mp3"])

    assert args.session == "morning"
    assert args.sound == "rain.mp3"


def test_native_edits_reach_update_buffer() -> None:
    buffers: List[str] = []
    hooks = AuthoringUIHooks(update_buffer=lambda view: buffers.append(view.text))
    controller = AuthoringController(make_session(), hooks)

    controller.sync_from_host("hello", 5, 5)

    assert buffers == ["", "hello"]


def test_controller_claims_engine_keys() -> None:
    hooks = AuthoringUIHooks(update_buffer=lambda view: None)
    controller = AuthoringController(make_session(), hooks)

    for key in ("tab", "shift+tab", "enter", "shift+enter", "ctrl+s", "super+s"):
        assert controller.claims_key(key), key
    for key in ("s", "a", "alt+s", "escape"):
        assert not controller.claims_key(key), key


def test_delete_saved_session_messages(tmp_path: Path) -> None:
    from inkwell.adapters.textual.app import delete_saved_session

    store = SessionStore(tmp_path)
    store.save(WritingSession(name="old", text="x"))

    assert delete_saved_session(store, "old") == (
        "File 'old' deleted successfully!",
        "success",
    )
    assert delete_saved_session(store, "old") == (
        "Error deleting file: File not found",
        "error",
    )
    assert store.list() == []
