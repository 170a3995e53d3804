"""Stroke-to-action resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from inkwell.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    token: str
    match: Optional[ResolutionMatch] = None


def _rank(binding: Binding, token: str) -> tuple[bool, int, str]:
    # exact token first, then priority, then id
    return (binding.token != token, -binding.priority, binding.id)


class KeymapResolver:
    """Picks the winning binding for a stroke."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._revision = -1
        self._by_key: Dict[str, tuple[Binding, ...]] = {}

    def resolve(self, stroke: KeyStroke) -> ResolutionResult:
        token = stroke.token
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"token": token},
        ) as handle:
            candidates = [
                binding
                for binding in self._index().get(stroke.key, ())
                if binding.matches(stroke)
            ]
            if not candidates:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss", token=token)

            binding = min(candidates, key=lambda b: _rank(b, token))
            handle.add_metadata("binding_id", binding.id)
            action = self._registry.get_action(binding.action_id)
            return ResolutionResult(
                status="match",
                token=token,
                match=ResolutionMatch(binding=binding, action=action),
            )

    def reset(self) -> None:
        self._revision = -1
        self._by_key = {}

    def _index(self) -> Dict[str, tuple[Binding, ...]]:
        revision = self._registry.revision()
        if revision != self._revision:
            grouped: Dict[str, list[Binding]] = {}
            for binding in self._registry.iter_bindings():
                grouped.setdefault(binding.stroke.key, []).append(binding)
            self._by_key = {key: tuple(group) for key, group in grouped.items()}
            self._revision = revision
        return self._by_key


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
