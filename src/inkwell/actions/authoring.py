"""Authoring actions bound to the save accelerator, Tab and Enter."""

from __future__ import annotations

from inkwell.buffer import TextEdit
from inkwell.keystrokes import KeyRequest, KeyResult
from inkwell.lines import current_line, match_list_marker


def request_save(request: KeyRequest, match: object) -> KeyResult:
    del request, match
    return KeyResult.request_save()


def insert_indent(request: KeyRequest, match: object) -> KeyResult:
    """Replace the selection with one indent unit."""

    del match
    edit = TextEdit(request.start, request.end, request.indent_unit)
    return KeyResult.transform(request.text, edit, edit.caret_after)


def continue_list(request: KeyRequest, match: object) -> KeyResult:
    """Start the next list item when Enter lands on a list line."""

    del match
    marker = match_list_marker(current_line(request.text, request.start))
    if marker is None:
        return KeyResult.passthrough()
    edit = TextEdit(request.start, request.start, "\n" + marker.next_marker())
    return KeyResult.transform(request.text, edit, edit.caret_after)


__all__ = ["continue_list", "insert_indent", "request_save"]
