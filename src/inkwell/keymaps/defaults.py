"""Built-in authoring keymap."""

from __future__ import annotations

from typing import Iterable, Sequence

from inkwell.actions import authoring

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="authoring.request_save",
        handler=authoring.request_save,
        description="Ask the host to save the session",
    ),
    ActionRef(
        id="authoring.indent",
        handler=authoring.insert_indent,
        description="Replace the selection with one indent unit",
    ),
    ActionRef(
        id="authoring.continue_list",
        handler=authoring.continue_list,
        description="Continue an ordered or unordered list on Enter",
    ),
)

# Tab, Enter and the save chord fire whatever other modifiers are held.
DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="authoring.save_ctrl",
        stroke=KeyStroke("s", ("ctrl",)),
        action_id="authoring.request_save",
        description="Save (ctrl)",
        exact=False,
        priority=30,
    ),
    Binding(
        id="authoring.save_meta",
        stroke=KeyStroke("s", ("meta",)),
        action_id="authoring.request_save",
        description="Save (cmd)",
        exact=False,
        priority=30,
    ),
    Binding(
        id="authoring.indent",
        stroke=KeyStroke("tab"),
        action_id="authoring.indent",
        description="Indent",
        exact=False,
        priority=20,
    ),
    Binding(
        id="authoring.continue",
        stroke=KeyStroke("enter"),
        action_id="authoring.continue_list",
        description="Continue list",
        exact=False,
        priority=10,
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    exclude_bindings: Sequence[str] | None = None,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register the authoring actions and their default strokes."""

    skipped = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        if binding.id in skipped:
            continue
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
