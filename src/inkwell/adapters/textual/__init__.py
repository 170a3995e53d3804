"""Textual host for the authoring engine."""

from .controller import AuthoringController, AuthoringUIHooks, split_textual_key
from .preview import nodes_to_rich

__all__ = [
    "AuthoringController",
    "AuthoringUIHooks",
    "nodes_to_rich",
    "split_textual_key",
]
