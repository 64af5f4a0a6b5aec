"""Editor logging built on telelog.

The editor owns the terminal, so nothing reaches the console unless
``MODAL_EDITOR_LOG_CONSOLE`` is set; ``MODAL_EDITOR_LOG_FILE`` captures logs
while editing. ``MODAL_EDITOR_LOG_PRESET`` selects one of ``LOG_PRESETS``
instead of the individual ``MODAL_EDITOR_LOG_*`` switches.

``configure(environ)`` -- rebuild the telelog configuration from the environment
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured ``event::<name>`` line
``span(name, ...)`` -- profile a block, optionally tracked as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MODAL_EDITOR_"
ROOT_LOGGER = "modal_editor"

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


@dataclass(frozen=True)
class LogPreset:
    level: str
    log_file: str
    json: bool = False
    buffered: bool = False


LOG_PRESETS: Dict[str, LogPreset] = {
    "debug": LogPreset("DEBUG", "modal_editor-debug.log"),
    "quiet": LogPreset("WARNING", "modal_editor.log", buffered=True),
    "trace": LogPreset(
        "DEBUG", "modal_editor-trace.jsonl", json=True, buffered=True
    ),
}


def _setting(environ: Mapping[str, str], name: str) -> str:
    return environ.get(f"{ENV_PREFIX}{name}", "")


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return _setting(environ, name).lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _apply_preset(config: Any, name: str, log_file: str) -> Any:
    try:
        preset = LOG_PRESETS[name]
    except KeyError:
        choices = ", ".join(sorted(LOG_PRESETS))
        raise ValueError(
            f"Unknown log preset '{name}' (expected one of: {choices})"
        ) from None
    config.with_min_level(preset.level)
    config.with_console_output(False)
    config.with_file_output(log_file or preset.log_file)
    config.with_json_format(preset.json)
    if preset.buffered:
        config.with_buffering(True)
    return config


def build_config(environ: Optional[Mapping[str, str]] = None) -> Any:
    """Translate ``MODAL_EDITOR_LOG_*`` variables into a ``telelog.Config``."""

    env = os.environ if environ is None else environ
    config = tl.Config()
    config.with_profiling(True)
    log_file = _setting(env, "LOG_FILE")

    preset = _setting(env, "LOG_PRESET").lower()
    if preset:
        return _apply_preset(config, preset, log_file)

    config.with_min_level((_setting(env, "LOG_LEVEL") or "INFO").upper())
    console = _flag(env, "LOG_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _flag(env, "NO_COLOR"))
    if _flag(env, "LOG_JSON"):
        config.with_json_format(True)
    if log_file:
        config.with_file_output(log_file)
    if _flag(env, "LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_setting(env, "LOG_BUFFER_SIZE") or "2048"))
    return config


def configure(environ: Optional[Mapping[str, str]] = None) -> None:
    """Adopt a fresh configuration; cached loggers are rebuilt on next use.

    Raises ``ValueError`` for an unknown ``MODAL_EDITOR_LOG_PRESET``.
    """

    global _config
    _config = build_config(environ)
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger``; the configuration is built on first use."""

    global _config
    logger_name = name or ROOT_LOGGER
    if logger_name not in _loggers:
        if _config is None:
            _config = build_config()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _log(logger: Any, level: str, message: str, data: Mapping[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _stringify(v)) for k, v in data.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(data)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Lets the body of a ``span`` attach metadata reported on failure."""

    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` tracks the block as a component of the same name; a
    string names the component explicitly. ``metadata`` is added to the
    logger context for the duration of the block. An exception escaping the
    block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    handle = SpanHandle(name=name, component=component_name)

    context_keys = []
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
        log.add_context(key, handle.metadata[key])
        context_keys.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            details = {"span": name, **handle.metadata, "reason": str(exc)}
            if component_name:
                details["component"] = component_name
            _log(log, "error", "span::fail", details)
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


__all__ = [
    "LOG_PRESETS",
    "LogPreset",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
