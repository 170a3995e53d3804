"""Toast-style notification queue with per-item expiry."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Literal, Optional

from inkwell.config import DEFAULT_NOTIFICATION_MS

NotificationKind = Literal["success", "error", "info"]
_KINDS = ("success", "error", "info")


@dataclass(frozen=True, slots=True)
class Notification:
    id: int
    kind: NotificationKind
    message: str
    deadline: float


class NotificationQueue:
    """Notifications stay active until dismissed or their deadline passes."""

    def __init__(
        self,
        *,
        default_duration_ms: int = DEFAULT_NOTIFICATION_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ms = default_duration_ms
        self._clock = clock
        self._items: Dict[int, Notification] = {}
        self._counter = 0

    def push(
        self,
        message: str,
        kind: str = "info",
        *,
        duration_ms: Optional[int] = None,
    ) -> int:
        if kind not in _KINDS:
            raise ValueError(f"Unknown notification kind '{kind}'")
        self._counter += 1
        ms = self._default_ms if duration_ms is None else duration_ms
        self._items[self._counter] = Notification(
            id=self._counter,
            kind=kind,  # type: ignore[arg-type]
            message=message,
            deadline=self._clock() + ms / 1000.0,
        )
        return self._counter

    def dismiss(self, notification_id: int) -> Optional[Notification]:
        return self._items.pop(notification_id, None)

    def expire(self, now: Optional[float] = None) -> List[Notification]:
        """Drop and return every notification whose deadline has passed."""

        current = self._clock() if now is None else now
        expired = [item for item in self._items.values() if item.deadline <= current]
        for item in expired:
            del self._items[item.id]
        return expired

    def active(self) -> List[Notification]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["Notification", "NotificationKind", "NotificationQueue"]
