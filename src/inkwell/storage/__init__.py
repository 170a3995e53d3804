"""Persistence for named sessions and style preferences."""

from .errors import SessionNotFoundError, SessionStoreError
from .preferences import (
    FONTS,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    RANDOM_FONTS,
    PreferenceStore,
    Preferences,
    clamp_font_size,
    pick_random_font,
)
from .sessions import SessionStore, WritingSession

__all__ = [
    "FONTS",
    "MAX_FONT_SIZE",
    "MIN_FONT_SIZE",
    "RANDOM_FONTS",
    "PreferenceStore",
    "Preferences",
    "SessionNotFoundError",
    "SessionStore",
    "SessionStoreError",
    "WritingSession",
    "clamp_font_size",
    "pick_random_font",
]
