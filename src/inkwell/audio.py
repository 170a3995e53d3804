"""Background audio playback through the platform's command-line player."""

from __future__ import annotations

import subprocess
import sys
from typing import List, Optional

from inkwell.runtime import telemetry


class AudioPlaybackError(RuntimeError):
    """Raised when the platform player cannot be started."""


def player_command(path: str, platform: Optional[str] = None) -> List[str]:
    target = platform or sys.platform
    if target.startswith("darwin"):
        return ["afplay", path]
    if target.startswith("win"):
        return [
            "powershell",
            "-c",
            f"(New-Object Media.SoundPlayer '{path}').PlaySync();",
        ]
    return ["ffplay", "-nodisp", "-autoexit", path]


class AudioPlayer:
    """Plays one file at a time; starting a new one stops the previous."""

    def __init__(self) -> None:
        self._process: Optional[subprocess.Popen[bytes]] = None
        self.current_path: Optional[str] = None

    def play(self, path: str) -> None:
        self.stop()
        command = player_command(path)
        try:
            self._process = subprocess.Popen(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise AudioPlaybackError(f"Failed to play audio: {exc}") from exc
        self.current_path = path
        telemetry.record_event("audio.play", data={"path": path, "player": command[0]})

    def stop(self) -> None:
        process, self._process = self._process, None
        if process is not None and process.poll() is None:
            process.kill()
            process.wait()

    def is_playing(self) -> bool:
        return self._process is not None and self._process.poll() is None


__all__ = ["AudioPlaybackError", "AudioPlayer", "player_command"]
