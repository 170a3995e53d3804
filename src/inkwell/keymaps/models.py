"""Dataclasses describing key strokes, bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

# Host spellings folded onto one canonical name.
_KEY_ALIASES = {
    "return": "enter",
    "ret": "enter",
    "\n": "enter",
    "\r": "enter",
    "\t": "tab",
    "esc": "escape",
}

_MODIFIER_ALIASES = {
    "control": "ctrl",
    "cmd": "meta",
    "command": "meta",
    "super": "meta",
    "option": "alt",
}


def normalize_key(key: str) -> str:
    if key in _KEY_ALIASES:
        return _KEY_ALIASES[key]
    lowered = key.strip().lower() if len(key) > 1 else key.lower()
    return _KEY_ALIASES.get(lowered, lowered)


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = []
    for raw in modifiers:
        cleaned = raw.strip().lower()
        if cleaned:
            values.append(_MODIFIER_ALIASES.get(cleaned, cleaned))
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", normalize_key(self.key))
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers) + f"+{self.key}"
        return self.key

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Build a stroke from ``"ctrl+s"`` style text."""

        cleaned = token.strip()
        if not cleaned:
            raise ValueError("token cannot be empty")
        if cleaned == "+" or cleaned.endswith("++"):
            mods = cleaned[:-2].split("+") if len(cleaned) > 1 else []
            return cls("+", tuple(m for m in mods if m))
        prefix, _, key = cleaned.rpartition("+")
        return cls(key, tuple(m for m in prefix.split("+") if m))


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable plus metadata; handlers receive ``(request, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with an action.

    An ``exact`` binding fires only for its own modifier set. Otherwise it
    fires whenever its modifiers are held, whatever else is held too; a
    non-exact ``tab`` therefore also answers shift+tab and ctrl+tab.
    """

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    exact: bool = True
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def token(self) -> str:
        return self.stroke.token

    def matches(self, stroke: KeyStroke) -> bool:
        if stroke.key != self.stroke.key:
            return False
        if self.exact:
            return stroke.modifiers == self.stroke.modifiers
        return set(self.stroke.modifiers) <= set(stroke.modifiers)


__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "normalize_key",
    "normalize_modifiers",
]
