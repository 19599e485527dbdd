"""Process-wide logger that writes ``key=value`` lines to standard output."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Any

_ATTRS = "kv"
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_BASE_LEVELS = (
    (logging.ERROR, "ERROR"),
    (logging.WARNING, "WARN"),
    (logging.INFO, "INFO"),
    (logging.DEBUG, "DEBUG"),
)


def _needs_quote(text: str) -> bool:
    if not text:
        return True
    return any(ch.isspace() or ch in '="' or not ch.isprintable() for ch in text)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False) if _needs_quote(text) else text


def _level_name(levelno: int) -> str:
    for base, name in _BASE_LEVELS:
        if levelno >= base:
            diff = levelno - base
            return f"{name}+{diff}" if diff else name
    return f"DEBUG-{logging.DEBUG - levelno}"


class KeyValueFormatter(logging.Formatter):
    """Formats records as ``time=... level=... msg=... key=value`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime(_TIME_FORMAT)
        parts = [
            f"time={_quote(stamp)}",
            f"level={_level_name(record.levelno)}",
            f"msg={_quote(record.getMessage())}",
        ]
        attrs: dict[str, Any] = getattr(record, _ATTRS, None) or {}
        parts.extend(f"{key}={_quote(str(value))}" for key, value in attrs.items())
        if record.exc_info:
            parts.append(f"exc={_quote(self.formatException(record.exc_info))}")
        return " ".join(parts)


class _StdoutHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stdout``."""

    def __init__(self) -> None:
        super().__init__(sys.stdout)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stdout

    @stream.setter
    def stream(self, value) -> None:
        pass


def _build(level: int, *, discard: bool = False) -> logging.Logger:
    logger = logging.Logger("supbot", level)
    handler: logging.Handler = logging.NullHandler() if discard else _StdoutHandler()
    handler.setFormatter(KeyValueFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


_default: logging.Logger = _build(logging.INFO)


def default() -> logging.Logger:
    """Return the current default logger."""
    return _default


def set_default(logger: logging.Logger) -> None:
    """Replace the default logger."""
    global _default
    _default = logger


def set_level(level: int) -> None:
    """Replace the default logger with a stdout logger at ``level``."""
    global _default
    _default = _build(level)


def disable() -> None:
    """Discard everything logged through the default logger."""
    global _default
    _default = _build(logging.INFO, discard=True)


def enable() -> None:
    """Restore a stdout logger at INFO level."""
    global _default
    _default = _build(logging.INFO)


def debug(msg: str, **kwargs: Any) -> None:
    _default.debug(msg, extra={_ATTRS: kwargs})


def info(msg: str, **kwargs: Any) -> None:
    _default.info(msg, extra={_ATTRS: kwargs})


def warn(msg: str, **kwargs: Any) -> None:
    _default.warning(msg, extra={_ATTRS: kwargs})


def error(msg: str, **kwargs: Any) -> None:
    _default.error(msg, extra={_ATTRS: kwargs})