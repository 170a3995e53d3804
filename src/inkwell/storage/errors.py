"""Storage error types."""

from __future__ import annotations


class SessionStoreError(RuntimeError):
    """Raised when a stored session cannot be read or written."""

    def __init__(self, message: str, *, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class SessionNotFoundError(SessionStoreError):
    def __init__(self, name: str) -> None:
        super().__init__("File not found", name=name)
