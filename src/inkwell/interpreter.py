"""Keystroke interpreter: decides between pass-through and synthetic edits."""

from __future__ import annotations

from typing import Iterable, Optional

from inkwell.config import DEFAULT_INDENT_UNIT
from inkwell.keymaps import KeymapRegistry, KeymapResolver, KeyStroke, ResolutionMatch
from inkwell.keymaps.defaults import load_default_keymaps
from inkwell.keystrokes import KeyRequest, KeyResult
from inkwell.runtime import telemetry


class KeystrokeInterpreter:
    """Maps ``(text, selection, key, modifiers)`` onto a :class:`KeyResult`.

    The interpreter is stateless between calls. Offsets are trusted: hosts
    clamp them to ``[0, len(text)]`` before calling.
    """

    def __init__(
        self,
        *,
        indent_unit: str = DEFAULT_INDENT_UNIT,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.indent_unit = indent_unit
        self.logger = telemetry.get_logger("inkwell.interpreter")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="inkwell.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="inkwell.keymaps"
        )

    def interpret(
        self,
        text: str,
        start: int,
        end: Optional[int],
        key: str,
        modifiers: Iterable[str] = (),
    ) -> KeyResult:
        stroke = KeyStroke(key, tuple(modifiers))
        if end is None:
            end = start
        elif end < start:
            start, end = end, start

        result = self.keymap_resolver.resolve(stroke)
        if result.status != "match" or result.match is None:
            return KeyResult.passthrough()

        request = KeyRequest(
            text=text,
            start=start,
            end=end,
            stroke=stroke,
            indent_unit=self.indent_unit,
        )
        return self._execute(request, result.match)

    def _execute(self, request: KeyRequest, match: ResolutionMatch) -> KeyResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ) as handle:
            outcome = match.action(request, match)
            if not isinstance(outcome, KeyResult):
                raise TypeError(
                    f"Action '{match.action.id}' returned {type(outcome).__name__}"
                )
            handle.add_metadata("status", outcome.status)
        return outcome


__all__ = ["KeystrokeInterpreter"]
