"""Action and binding store consulted by the resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from inkwell.runtime.telemetry import record_event, span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    tokens: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Two bindings claim the same stroke in the same matching mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        taken = ", ".join(other.id for other in self.conflicts)
        super().__init__(f"'{binding.token}' for '{binding.id}' is taken by {taken}")


class KeymapRegistry:
    """Actions by id and bindings grouped by base key.

    Every mutation bumps :meth:`revision` so resolvers know to re-index.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        self._revision += 1
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts same-id and conflicting entries."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "token": binding.token},
        ) as handle:
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                raise KeymapConflictError(binding, conflicts)
            for other in conflicts:
                del self._bindings[other.id]
                handle.add_metadata("evicted", other.id)

            self._bindings[binding.id] = binding
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._revision += 1
            record_event(
                "keymaps.unregister",
                data={"binding_id": binding_id},
                logger_name=self._logger_name,
            )
        return binding

    def iter_bindings(self, key: Optional[str] = None) -> Iterator[Binding]:
        """All bindings, or those on base ``key`` ordered by id."""

        if key is None:
            yield from self._bindings.values()
            return
        for binding in sorted(self._bindings.values(), key=lambda b: b.id):
            if binding.stroke.key == key:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            tokens=tuple(sorted({binding.token for binding in self._bindings.values()})),
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        return [
            other
            for other in self.iter_bindings(binding.stroke.key)
            if other.id != binding.id
            and other.token == binding.token
            and other.exact == binding.exact
        ]


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
