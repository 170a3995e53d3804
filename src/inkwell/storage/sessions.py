"""Named writing sessions persisted as one JSON file each."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

from inkwell.config import Theme
from inkwell.runtime import telemetry

from .errors import SessionNotFoundError, SessionStoreError

_FIELDS = ("name", "text", "font", "font_size", "theme")


@dataclass(frozen=True, slots=True)
class WritingSession:
    name: str
    text: str
    font: str = "serif"
    font_size: int = 20
    theme: str = Theme.LIGHT.value

    def to_json(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "WritingSession":
        missing = [key for key in _FIELDS if key not in data]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")
        return cls(
            name=str(data["name"]),
            text=str(data["text"]),
            font=str(data["font"]),
            font_size=int(data["font_size"]),
            theme=str(data["theme"]),
        )


def _validate_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("session name cannot be empty")
    if "/" in cleaned or "\\" in cleaned or cleaned in {".", ".."}:
        raise ValueError(f"invalid session name '{name}'")
    return cleaned


class SessionStore:
    """Directory of ``<name>.json`` session files."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        self.logger = telemetry.get_logger("inkwell.storage")

    def _path(self, name: str) -> Path:
        return self.root / f"{_validate_name(name)}.json"

    def _ensure_root(self) -> Path:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SessionStoreError(str(exc)) from exc
        return self.root

    def save(self, session: WritingSession) -> str:
        path = self._path(session.name)
        with telemetry.span(
            "storage::save", component="storage", metadata={"session": session.name}
        ):
            self._ensure_root()
            try:
                path.write_text(json.dumps(session.to_json()), encoding="utf-8")
            except OSError as exc:
                raise SessionStoreError(str(exc), name=session.name) from exc
        return f"File '{session.name}' saved successfully!"

    def load(self, name: str) -> WritingSession:
        path = self._path(name)
        if not path.exists():
            raise SessionNotFoundError(name)
        with telemetry.span(
            "storage::load", component="storage", metadata={"session": name}
        ):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                return WritingSession.from_json(data)
            except (OSError, ValueError, TypeError) as exc:
                raise SessionStoreError(
                    f"Cannot read session '{name}': {exc}", name=name
                ) from exc

    def list(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(path.stem for path in self.root.glob("*.json") if path.is_file())

    def exists(self, name: str) -> bool:
        return self._path(name).is_file()

    def delete(self, name: str) -> str:
        path = self._path(name)
        if not path.exists():
            raise SessionNotFoundError(name)
        try:
            path.unlink()
        except OSError as exc:
            raise SessionStoreError(str(exc), name=name) from exc
        telemetry.record_event("storage.delete", data={"session": name})
        return f"File '{name}' deleted successfully!"


__all__ = ["SessionStore", "WritingSession"]
