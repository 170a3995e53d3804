"""Buffer abstractions: document text, selection, and host snapshots."""

from .buffer import Buffer, TextEdit
from .positions import Location, location_to_offset, offset_to_location
from .state import BufferState, Selection
from .sync import BufferValidationError, BufferView
from .validation import ensure_offset

__all__ = [
    "Buffer",
    "BufferState",
    "BufferValidationError",
    "BufferView",
    "Location",
    "Selection",
    "TextEdit",
    "ensure_offset",
    "location_to_offset",
    "offset_to_location",
]
