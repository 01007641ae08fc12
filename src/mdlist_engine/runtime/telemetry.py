"""Logging, events, and profiling spans for the list engine, on top of telelog.

Public surface:

``configure(config=..., preset=...)``
    swap the active telelog configuration
``get_logger(name)``
    cached ``telelog.Logger`` for ``name``
``record_event(name, level=..., data=...)``
    one structured ``event::<name>`` line
``span(name, component=..., metadata=...)``
    profile a block, optionally tracked as a component

Keystroke handlers run inside ``listedit::*`` spans and buffer mutations
inside ``buffer::*`` spans, so one Enter press shows up as a handler span
wrapping every edit it issued.

Settings come from ``MDLIST_ENGINE_*`` environment variables:
``LOG_LEVEL``, ``LOG_FILE``, ``LOG_JSON``, ``LOG_BUFFERED``,
``LOG_BUFFER_SIZE``, ``DISABLE_CONSOLE``, ``NO_COLOR``, ``LOGGER`` and
``TELEMETRY_PRESET``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MDLIST_ENGINE_"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read an ``MDLIST_ENGINE_*`` environment variable."""

    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


DEFAULT_LOGGER_NAME = env("LOGGER") or "mdlist_engine"


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Everything needed to build a ``telelog.Config``."""

    level: str = "INFO"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls) -> "LogSettings":
        buffer_size = None
        if env_flag("LOG_BUFFERED", False):
            buffer_size = int(env("LOG_BUFFER_SIZE") or "2048")
        return cls(
            level=(env("LOG_LEVEL") or "INFO").upper(),
            console=not env_flag("DISABLE_CONSOLE", False),
            color=not env_flag("NO_COLOR", False),
            json=env_flag("LOG_JSON", False),
            log_file=env("LOG_FILE") or "",
            buffer_size=buffer_size,
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        config.with_json_format(self.json)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size is not None:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # Keystroke spans carry no timing without profiling.
        config.with_profiling(True)
        return config


def preset_settings(preset: str) -> LogSettings:
    """Settings for ``development``, ``production`` or ``quiet``."""

    base = LogSettings.from_env()
    key = preset.strip().lower()
    if key == "development":
        return replace(base, level="DEBUG", console=True, color=True, json=False)
    if key == "production":
        return replace(
            base,
            level="INFO",
            console=False,
            log_file=base.log_file or "mdlist_engine.log",
            buffer_size=base.buffer_size or 2048,
        )
    if key == "quiet":
        # The TUI demo and test runs own the terminal.
        return replace(base, level="WARNING", console=False)
    raise ValueError(f"Unknown preset '{preset}'.")


_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install ``config`` (a ``telelog.Config``) or a named ``preset``.

    With neither, settings are re-read from the environment. Loggers
    handed out earlier keep their old configuration.
    """

    global _CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if config is None:
        preset = preset or env("TELEMETRY_PRESET")
        settings = preset_settings(preset) if preset else LogSettings.from_env()
        config = settings.to_config()
    else:
        config.with_profiling(True)
    _CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    if _CONFIG is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGERS.get(logger_name)
    if logger is None:
        logger = _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(logger: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    """Log ``message`` with ``payload`` pairs, via ``<level>_with`` when telelog has it."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by :func:`span`; metadata added here lands in its log lines."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


def _component_name(name: str, component: Optional[str | bool]) -> Optional[str]:
    if component is True:
        return name
    if isinstance(component, str):
        return component
    return None


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``.

    ``component=True`` tracks the block as a component of the same name, a
    string names the component explicitly. ``metadata`` is attached as log
    context for the duration of the block. An exception escaping the block
    is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    context: Tuple[Tuple[str, str], ...] = tuple(
        (key, _text(value)) for key, value in (metadata or {}).items()
    )
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=_component_name(name, component),
        metadata=dict(context),
    )

    with ExitStack() as stack:
        for key, value in context:
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if handle.component_name:
            stack.enter_context(log.track_component(handle.component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()
logger = get_logger()

__all__ = [
    "LogSettings",
    "SpanHandle",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "logger",
    "preset_settings",
    "record_event",
    "span",
]
