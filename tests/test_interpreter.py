from __future__ import annotations

import pytest

from inkwell.keymaps import ActionRef, Binding, KeymapRegistry, KeyStroke
from inkwell.keystrokes import REQUEST_SAVE, KeyResult
from inkwell.interpreter import KeystrokeInterpreter
from inkwell.lines import current_line, match_list_marker


def make_interpreter(**kwargs) -> KeystrokeInterpreter:
    return KeystrokeInterpreter(**kwargs)


def test_tab_inserts_indent_unit() -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret("ab", 1, 1, "tab")

    assert result.consumed
    assert result.status == "transform"
    assert result.text == "a  b"
    assert result.cursor == 3


def test_tab_replaces_selection() -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret("hello world", 0, 5, "tab")

    assert result.text == "   world"
    assert result.cursor == 2


def test_tab_honors_configured_indent_unit() -> None:
    interpreter = make_interpreter(indent_unit="\t")

    result = interpreter.interpret("x", 0, None, "tab")

    assert result.text == "\tx"
    assert result.cursor == 1


def test_reversed_selection_is_normalized() -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret("abcd", 3, 1, "tab")

    assert result.text == "a  d"
    assert result.cursor == 3


def test_enter_continues_unordered_list() -> None:
    interpreter = make_interpreter()
    text = "- item"

    result = interpreter.interpret(text, len(text), None, "enter")

    assert result.status == "transform"
    assert result.edit is not None
    assert result.edit.insert == "\n- "
    assert result.text == "- item\n- "
    assert result.cursor == len(result.text)


def test_enter_keeps_bullet_and_indentation() -> None:
    interpreter = make_interpreter()
    text = "intro\n  * nested"

    result = interpreter.interpret(text, len(text), None, "enter")

    assert result.text == "intro\n  * nested\n  * "


def test_enter_increments_ordered_list() -> None:
    interpreter = make_interpreter()
    text = "3. item"

    result = interpreter.interpret(text, len(text), None, "enter")

    assert result.edit is not None
    assert result.edit.insert == "\n4. "
    assert result.cursor == len("3. item\n4. ")


def test_enter_mid_line_splits_at_cursor() -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret("- one two", 5, None, "enter")

    assert result.text == "- one\n-  two"
    assert result.cursor == 8


@pytest.mark.parametrize("text", ["", "   ", "plain text", "-item", "1.item"])
def test_enter_passes_through_without_marker(text: str) -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret(text, len(text), None, "enter")

    assert result == KeyResult.passthrough()
    assert not result.consumed


@pytest.mark.parametrize(
    "key, modifiers", [("s", ("ctrl",)), ("s", ("meta",)), ("S", ("Control",))]
)
def test_save_accelerator_raises_signal(key: str, modifiers: tuple[str, ...]) -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret("draft", 2, None, key, modifiers)

    assert result.consumed
    assert result.status == "save"
    assert result.signal == REQUEST_SAVE
    assert result.edit is None


@pytest.mark.parametrize(
    "key, modifiers", [("a", ()), ("s", ()), ("s", ("alt",)), ("backspace", ())]
)
def test_other_keys_pass_through(key: str, modifiers: tuple[str, ...]) -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret("- item", 6, None, key, modifiers)

    assert result.status == "pass"


def test_custom_registry_replaces_defaults() -> None:
    registry = KeymapRegistry()
    registry.register_action(
        ActionRef(id="custom.save", handler=lambda request, match: KeyResult.request_save())
    )
    registry.register_binding(
        Binding(id="custom.f2", stroke=KeyStroke("f2"), action_id="custom.save")
    )
    interpreter = make_interpreter(keymap_registry=registry)

    assert interpreter.interpret("", 0, None, "f2").status == "save"
    assert interpreter.interpret("", 0, None, "tab").status == "pass"


def test_action_must_return_key_result() -> None:
    registry = KeymapRegistry()
    registry.register_action(ActionRef(id="broken", handler=lambda request, match: "oops"))
    registry.register_binding(
        Binding(id="broken.tab", stroke=KeyStroke("tab"), action_id="broken")
    )
    interpreter = make_interpreter(keymap_registry=registry)

    with pytest.raises(TypeError):
        interpreter.interpret("", 0, None, "tab")


def test_current_line_stops_at_offset() -> None:
    assert current_line("one\ntwo three", 7) == "two"
    assert current_line("one\n", 4) == ""
    assert current_line("solo", 2) == "so"


def test_match_list_marker_kinds() -> None:
    ordered = match_list_marker("  12. step")
    assert ordered is not None
    assert ordered.kind == "ordered"
    assert ordered.next_marker() == "  13. "

    bullet = match_list_marker("* thing")
    assert bullet is not None
    assert bullet.next_marker() == "* "

    assert match_list_marker("#1. heading") is None


@pytest.mark.parametrize("modifiers", [("shift",), ("ctrl",), ("alt", "shift")])
def test_enter_continues_list_with_modifiers_held(modifiers: tuple[str, ...]) -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret("- item", 6, None, "enter", modifiers)

    assert result.status == "transform"
    assert result.text == "- item\n- "


@pytest.mark.parametrize("modifiers", [("shift",), ("ctrl",)])
def test_tab_indents_with_modifiers_held(modifiers: tuple[str, ...]) -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret("ab", 1, None, "tab", modifiers)

    assert result.text == "a  b"
    assert result.cursor == 3


@pytest.mark.parametrize("modifiers", [("ctrl", "meta"), ("ctrl", "shift"), ("alt", "meta")])
def test_save_fires_for_any_chord_with_ctrl_or_meta(modifiers: tuple[str, ...]) -> None:
    interpreter = make_interpreter()

    result = interpreter.interpret("ab", 1, None, "s", modifiers)

    assert result.status == "save"
    assert result.signal == REQUEST_SAVE
