from __future__ import annotations

import subprocess
from typing import List

import pytest

from inkwell.audio import AudioPlaybackError, AudioPlayer, player_command
from inkwell.timer import MAX_MINUTES, MIN_MINUTES, CountdownTimer, format_seconds


def test_format_seconds() -> None:
    assert format_seconds(0) == "0:00"
    assert format_seconds(65) == "1:05"
    assert format_seconds(900) == "15:00"


def test_adjust_is_clamped_and_ignored_while_running() -> None:
    timer = CountdownTimer(minutes=2)

    assert timer.adjust(-5) == MIN_MINUTES
    assert timer.adjust(500) == MAX_MINUTES

    timer.start()
    assert timer.adjust(-10) == MAX_MINUTES


def test_display_idle_and_running() -> None:
    timer = CountdownTimer()
    assert timer.display() == "15:00"

    timer.start()
    timer.tick(61)

    assert timer.display() == "13:59"


def test_tick_expires_and_resets() -> None:
    fired: List[bool] = []
    timer = CountdownTimer(minutes=1, on_expire=lambda: fired.append(True))

    assert timer.tick() is False  # not running
    timer.start()
    assert timer.tick(59) is False
    assert timer.tick() is True

    assert fired == [True]
    assert not timer.running
    assert timer.seconds_left == 60


def test_toggle_stops_and_resets() -> None:
    timer = CountdownTimer(minutes=3)

    assert timer.toggle() is True
    timer.tick(10)
    assert timer.toggle() is False
    assert timer.seconds_left == 180


@pytest.mark.parametrize(
    "platform, program",
    [("darwin", "afplay"), ("win32", "powershell"), ("linux", "ffplay")],
)
def test_player_command_per_platform(platform: str, program: str) -> None:
    command = player_command("rain.mp3", platform=platform)

    assert command[0] == program
    assert "rain.mp3" in " ".join(command)


class FakeProcess:
    def __init__(self, command: List[str], **_kwargs: object) -> None:
        self.command = command
        self.killed = False

    def poll(self) -> int | None:
        return 0 if self.killed else None

    def kill(self) -> None:
        self.killed = True

    def wait(self) -> int:
        return 0


def test_audio_player_replaces_running_process(monkeypatch: pytest.MonkeyPatch) -> None:
    started: List[FakeProcess] = []

    def fake_popen(command: List[str], **kwargs: object) -> FakeProcess:
        process = FakeProcess(command, **kwargs)
        started.append(process)
        return process

    monkeypatch.setattr(subprocess, "Popen", fake_popen)
    player = AudioPlayer()

    player.play("one.mp3")
    player.play("two.mp3")

    assert started[0].killed
    assert player.is_playing()
    assert player.current_path == "two.mp3"

    player.stop()
    assert not player.is_playing()


def test_audio_player_wraps_launch_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_popen(command: List[str], **kwargs: object) -> FakeProcess:
        raise FileNotFoundError(command[0])

    monkeypatch.setattr(subprocess, "Popen", failing_popen)

    with pytest.raises(AudioPlaybackError):
        AudioPlayer().play("rain.mp3")
