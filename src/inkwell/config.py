"""Editor settings and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "INKWELL_"

DEFAULT_INDENT_UNIT = "  "
DEFAULT_NOTIFICATION_MS = 2500
DEFAULT_TIMER_MINUTES = 15


class Theme(str, Enum):
    """Colour schemes the writing surface knows about."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


def _default_data_dir() -> Path:
    base = os.getenv("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(base) / "inkwell"


def _parse_indent(raw: str) -> str:
    if raw.lower() == "tab":
        return "\t"
    if raw.isdigit():
        return " " * int(raw)
    return raw


def _int(raw: Optional[str], fallback: int) -> int:
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback


@dataclass(frozen=True)
class Settings:
    """Runtime configuration resolved once at startup."""

    indent_unit: str = DEFAULT_INDENT_UNIT
    data_dir: Path = field(default_factory=_default_data_dir)
    notification_ms: int = DEFAULT_NOTIFICATION_MS
    timer_minutes: int = DEFAULT_TIMER_MINUTES

    def __post_init__(self) -> None:
        if not self.indent_unit:
            raise ValueError("indent_unit cannot be empty")

    @property
    def sessions_dir(self) -> Path:
        return self.data_dir / "user_data"

    @property
    def preferences_path(self) -> Path:
        return self.data_dir / "preferences.json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        indent = get("INDENT")
        data_dir = get("DATA_DIR")
        return cls(
            indent_unit=_parse_indent(indent) if indent else DEFAULT_INDENT_UNIT,
            data_dir=Path(data_dir).expanduser() if data_dir else _default_data_dir(),
            notification_ms=_int(get("NOTIFY_MS"), DEFAULT_NOTIFICATION_MS),
            timer_minutes=_int(get("TIMER_MINUTES"), DEFAULT_TIMER_MINUTES),
        )


__all__ = [
    "DEFAULT_INDENT_UNIT",
    "DEFAULT_NOTIFICATION_MS",
    "DEFAULT_TIMER_MINUTES",
    "Settings",
    "Theme",
]
