"""Editing verbs that keymap bindings dispatch to."""

from .authoring import continue_list, insert_indent, request_save

__all__ = ["continue_list", "insert_indent", "request_save"]
