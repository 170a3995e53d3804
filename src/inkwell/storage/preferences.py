"""Process-wide style preferences: theme, font, font size, last content."""

from __future__ import annotations

import json
import random
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Optional

from inkwell.config import Theme
from inkwell.runtime import telemetry

DEFAULT_THEME = Theme.LIGHT.value
DEFAULT_FONT = "serif"
DEFAULT_FONT_SIZE = 20
MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 48

FONTS = ("Serif", "Sans-serif", "Monospace")
RANDOM_FONTS = ("Cursive", "Verdana", "Georgia", "Courier New", "Ubuntu", "Ubuntu Mono")


def clamp_font_size(size: int) -> int:
    return max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, size))


def pick_random_font(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(RANDOM_FONTS)


@dataclass(frozen=True, slots=True)
class Preferences:
    theme: str = DEFAULT_THEME
    font: str = DEFAULT_FONT
    font_size: int = DEFAULT_FONT_SIZE
    editor_content: str = ""

    def with_font_size(self, size: int) -> "Preferences":
        return replace(self, font_size=clamp_font_size(size))

    def step_font_size(self, delta: int) -> "Preferences":
        return self.with_font_size(self.font_size + delta)

    def toggle_theme(self) -> "Preferences":
        try:
            current = Theme(self.theme)
        except ValueError:
            current = Theme.DARK
        return replace(self, theme=current.toggled().value)


class PreferenceStore:
    """Single JSON file holding :class:`Preferences`."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.logger = telemetry.get_logger("inkwell.storage")

    def load(self) -> Preferences:
        """Return stored preferences, or defaults when the file is unusable."""

        if not self.path.exists():
            return Preferences()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Preferences(
                theme=str(data.get("theme") or DEFAULT_THEME),
                font=str(data.get("font") or DEFAULT_FONT),
                font_size=clamp_font_size(int(data.get("font_size", DEFAULT_FONT_SIZE))),
                editor_content=str(data.get("editor_content") or ""),
            )
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            telemetry.record_event(
                "preferences.load_failed",
                level="warning",
                data={"path": str(self.path), "error": str(exc)},
            )
            return Preferences()

    def save(self, preferences: Preferences) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(asdict(preferences)), encoding="utf-8")


__all__ = [
    "DEFAULT_FONT",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_THEME",
    "FONTS",
    "MAX_FONT_SIZE",
    "MIN_FONT_SIZE",
    "PreferenceStore",
    "Preferences",
    "RANDOM_FONTS",
    "clamp_font_size",
    "pick_random_font",
]
