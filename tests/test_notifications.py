from __future__ import annotations

import pytest

from inkwell.notifications import NotificationQueue


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def make_queue(clock: FakeClock) -> NotificationQueue:
    return NotificationQueue(clock=clock)


def test_push_assigns_ids_and_deadlines() -> None:
    clock = FakeClock()
    queue = make_queue(clock)

    first = queue.push("File 'a' saved successfully!", "success")
    second = queue.push("File not found", "error", duration_ms=500)

    assert (first, second) == (1, 2)
    items = queue.active()
    assert [item.kind for item in items] == ["success", "error"]
    assert items[0].deadline == pytest.approx(102.5)
    assert items[1].deadline == pytest.approx(100.5)


def test_expire_drops_only_due_items() -> None:
    clock = FakeClock()
    queue = make_queue(clock)
    queue.push("short", duration_ms=1000)
    queue.push("long")

    clock.now = 101.0
    expired = queue.expire()

    assert [item.message for item in expired] == ["short"]
    assert [item.message for item in queue.active()] == ["long"]
    assert queue.expire(now=200.0)[0].message == "long"
    assert len(queue) == 0


def test_dismiss() -> None:
    queue = make_queue(FakeClock())
    ident = queue.push("hello")

    assert queue.dismiss(ident) is not None
    assert queue.dismiss(ident) is None


def test_unknown_kind_rejected() -> None:
    queue = make_queue(FakeClock())

    with pytest.raises(ValueError):
        queue.push("oops", "warning")
