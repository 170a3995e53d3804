"""telelog wiring for inkwell.

Only four entry points are used by the rest of the package: ``configure``,
``get_logger``, ``record_event`` and ``span``. Settings come from ``INKWELL_*``
environment variables (``LOG_LEVEL``, ``LOG_FILE``, ``LOG_JSON``,
``DISABLE_CONSOLE``, ``NO_COLOR``) unless the ``quiet`` preset is chosen.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "INKWELL_"
ROOT_LOGGER = "inkwell"

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _setting(name: str) -> str:
    return os.environ.get(ENV_PREFIX + name, "").strip()


def _enabled(name: str) -> bool:
    return _setting(name).lower() in ("1", "true", "yes", "on")


def _build_config(quiet: bool) -> Any:
    config = tl.Config()
    config.with_profiling(True)
    if quiet:
        # no console: a TUI owns the terminal
        config.with_min_level("WARNING")
        config.with_console_output(False)
        return config

    config.with_min_level((_setting("LOG_LEVEL") or "INFO").upper())
    console = not _enabled("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _enabled("NO_COLOR"))
    if _enabled("LOG_JSON"):
        config.with_json_format(True)
    if _setting("LOG_FILE"):
        config.with_file_output(_setting("LOG_FILE"))
    return config


def configure(*, preset: Optional[str] = None) -> None:
    """Rebuild the telelog config; ``preset="quiet"`` silences the console."""

    global _config
    if preset not in (None, "quiet"):
        raise ValueError(f"Unknown telemetry preset '{preset}'.")
    _config = _build_config(quiet=preset == "quiet")
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    if _config is None:
        configure()
    key = name or ROOT_LOGGER
    if key not in _loggers:
        _loggers[key] = tl.Logger.with_config(key, _config)
    return _loggers[key]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    pairs = [
        (str(key), value if isinstance(value, str) else repr(value))
        for key, value in payload.items()
    ]
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level.lower(), f"event::{name}", data or {})


@dataclass
class SpanHandle:
    logger: Any
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value if isinstance(value, str) else repr(value)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``; failures are logged as ``span::fail``.

    ``metadata`` rides on the logger context while the block runs and
    ``component`` additionally tracks it as a telelog component.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(log, name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            payload = {"span": name, **handle.metadata, "reason": str(exc)}
            _emit(log, "error", "span::fail", payload)
            raise


__all__ = ["SpanHandle", "configure", "get_logger", "record_event", "span"]
