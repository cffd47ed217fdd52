"""Thin facade over telelog shared by the buffer and the adapters.

``configure`` picks the active ``telelog.Config``, ``get_logger`` hands out
cached loggers, ``record_event`` writes one structured record and ``span``
wraps a block in a telelog profile and, optionally, a component scope.
"""

from __future__ import annotations

import os
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "QUILL_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "quill_engine")
PRESETS = ("development", "production", "quiet")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _setting(name: str) -> Optional[str]:
    return os.environ.get(ENV_PREFIX + name)


def _enabled(name: str) -> bool:
    return (_setting(name) or "").lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _preset_config(preset: str) -> Any:
    key = preset.lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'.")

    config = tl.Config()
    log_file = _setting("LOG_FILE")
    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(log_file or "quill_engine.log")
        config.with_buffering(True)
    else:
        # the Textual screen owns stdout, only a log file may receive records
        config.with_min_level("WARNING")
        config.with_console_output(False)
        if log_file:
            config.with_file_output(log_file)
    return config


def _environment_config() -> Any:
    config = tl.Config()
    config.with_min_level((_setting("LOG_LEVEL") or "INFO").upper())

    console = not _enabled("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _enabled("NO_COLOR"))
    if _enabled("LOG_JSON"):
        config.with_json_format(True)

    log_file = _setting("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if _enabled("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_setting("LOG_BUFFER_SIZE") or "2048"))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration and drop cached loggers.

    With neither argument the configuration is rebuilt from the
    ``QUILL_ENGINE_*`` environment variables. ``preset`` names one of
    :data:`PRESETS`; it cannot be combined with ``config``.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset is not None:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset is not None:
        config = _preset_config(preset)
    elif config is None:
        config = _environment_config()

    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    key = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(key)
    if logger is None:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = _environment_config()
            _ACTIVE_CONFIG.with_profiling(True)
        logger = tl.Logger.with_config(key, _ACTIVE_CONFIG)
        _LOGGER_CACHE[key] = logger
    return logger


def _write(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    method = getattr(logger, f"{level.lower()}_with", None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(message, [(str(key), _text(value)) for key, value in fields.items()])


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Write ``event::<name>`` with ``data`` attached as key/value pairs."""

    _write(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    """Yielded by :func:`span`. Metadata added here lands on the closing record."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def _fields(self, **extra: str) -> Dict[str, str]:
        fields = {"span": self.name}
        if self.component:
            fields["component"] = self.component
        fields.update(self.metadata)
        fields.update(extra)
        return fields

    def end(self) -> None:
        _write(self.logger, "debug", "span::end", self._fields())

    def fail(self, reason: str) -> None:
        _write(self.logger, "error", "span::fail", self._fields(reason=reason))


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``, tracked as ``component`` when given.

    ``metadata`` is pushed as logger context while the block runs. The block
    closes with a debug ``span::end`` record, or an error ``span::fail``
    record when an exception escapes, and both carry every key added through
    the handle. The exception is re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(
        logger=log,
        name=name,
        component=component,
        metadata={key: _text(value) for key, value in (metadata or {}).items()},
    )
    context_keys = list(handle.metadata)
    for key in context_keys:
        log.add_context(key, handle.metadata[key])

    scope = log.track_component(component) if component else nullcontext()
    try:
        with scope, log.profile(name):
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
            handle.end()
    finally:
        for key in context_keys:
            log.remove_context(key)


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
