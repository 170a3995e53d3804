from __future__ import annotations

import json
import random
from pathlib import Path

import pytest

from inkwell.storage import (
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    RANDOM_FONTS,
    PreferenceStore,
    Preferences,
    SessionNotFoundError,
    SessionStore,
    SessionStoreError,
    WritingSession,
    pick_random_font,
)


def make_store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "user_data")


def test_save_and_load_session(tmp_path: Path) -> None:
    store = make_store(tmp_path)
    session = WritingSession(name="draft", text="# Hi", font="Georgia", font_size=24)

    message = store.save(session)

    assert message == "File 'draft' saved successfully!"
    stored = json.loads((tmp_path / "user_data" / "draft.json").read_text())
    assert stored == {
        "name": "draft",
        "text": "# Hi",
        "font": "Georgia",
        "font_size": 24,
        "theme": "light",
    }
    assert store.load("draft") == session


def test_load_missing_session(tmp_path: Path) -> None:
    store = make_store(tmp_path)

    with pytest.raises(SessionNotFoundError) as excinfo:
        store.load("nope")

    assert str(excinfo.value) == "File not found"
    assert excinfo.value.name == "nope"


def test_load_corrupt_session(tmp_path: Path) -> None:
    store = make_store(tmp_path)
    (tmp_path / "user_data").mkdir()
    (tmp_path / "user_data" / "bad.json").write_text('{"name": "bad"}')

    with pytest.raises(SessionStoreError):
        store.load("bad")


def test_list_exists_and_delete(tmp_path: Path) -> None:
    store = make_store(tmp_path)
    assert store.list() == []

    store.save(WritingSession(name="b", text=""))
    store.save(WritingSession(name="a", text=""))

    assert store.list() == ["a", "b"]
    assert store.exists("a")
    assert store.delete("a") == "File 'a' deleted successfully!"
    assert store.list() == ["b"]
    with pytest.raises(SessionNotFoundError):
        store.delete("a")


@pytest.mark.parametrize("name", ["", "   ", "../escape", "a/b", ".."])
def test_invalid_session_names(tmp_path: Path, name: str) -> None:
    store = make_store(tmp_path)

    with pytest.raises(ValueError):
        store.save(WritingSession(name=name, text=""))


def test_preferences_default_when_missing(tmp_path: Path) -> None:
    store = PreferenceStore(tmp_path / "preferences.json")

    assert store.load() == Preferences()


def test_preferences_round_trip(tmp_path: Path) -> None:
    store = PreferenceStore(tmp_path / "nested" / "preferences.json")
    prefs = Preferences(theme="dark", font="Monospace", font_size=30, editor_content="x")

    store.save(prefs)

    assert store.load() == prefs


def test_preferences_fall_back_on_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    path.write_text("not json")

    assert PreferenceStore(path).load() == Preferences()


def test_preferences_clamp_font_size(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    path.write_text(json.dumps({"font_size": 200}))

    assert PreferenceStore(path).load().font_size == MAX_FONT_SIZE
    assert Preferences().step_font_size(-100).font_size == MIN_FONT_SIZE


def test_toggle_theme() -> None:
    assert Preferences().toggle_theme().theme == "dark"
    assert Preferences(theme="dark").toggle_theme().theme == "light"
    assert Preferences(theme="sepia").toggle_theme().theme == "light"


def test_pick_random_font_uses_rng() -> None:
    assert pick_random_font(random.Random(3)) in RANDOM_FONTS
