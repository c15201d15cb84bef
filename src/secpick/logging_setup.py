"""Logging configuration shared by the command-line entry points.

Provides helpers:
* ``setup_logging`` – idempotent configuration with a console stream and
    daily rotating info/debug files.
* ``get_logger`` – convenience that ensures configuration first.
* ``log_call`` – lightweight decorator for entry/exit tracing.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed by the CLIs.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from functools import wraps
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, ParamSpec, TypeVar

# ----- Custom TRACE level -------------------------------------------------
TRACE_LEVEL = 5
if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s | %(message)s"


def _resolve_level(level_name: str | None) -> int:
    name = (level_name or "INFO").upper()
    if name == "TRACE":
        return TRACE_LEVEL
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(force: bool = False, log_dir: str | Path | None = None) -> None:
    """Configure root logging for the CLIs.

    Level comes from ``LOG_LEVEL`` (``TRACE`` enables classifier traces).
    Files are written only when ``log_dir`` or ``SECPICK_LOG_DIR`` is set:
    ``secpick.log`` at INFO and ``secpick-debug.log`` at TRACE, rotated at
    midnight with 7 backups. Idempotent unless ``force`` is true.
    """
    if getattr(setup_logging, "_configured", False) and not force:
        return

    root = logging.getLogger()
    if force:  # pragma: no cover
        for h in list(root.handlers):
            root.removeHandler(h)

    level = _resolve_level(os.getenv("LOG_LEVEL"))
    root.setLevel(level)
    fmt = logging.Formatter(DEFAULT_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    console.setLevel(level)
    root.addHandler(console)

    target = log_dir or os.getenv("SECPICK_LOG_DIR")
    if target:
        out = Path(target)
        out.mkdir(parents=True, exist_ok=True)
        for filename, file_level in (("secpick.log", logging.INFO), ("secpick-debug.log", TRACE_LEVEL)):
            handler = TimedRotatingFileHandler(
                out / filename,
                when="midnight",
                backupCount=7,
                encoding="utf-8",
            )
            handler.setFormatter(fmt)
            handler.setLevel(file_level)
            root.addHandler(handler)

    setup_logging._configured = True  # type: ignore[attr-defined]


def get_logger(name: str) -> logging.Logger:
    """Return a logger ensuring configuration is applied first."""
    setup_logging()
    return logging.getLogger(name)


P = ParamSpec("P")
R = TypeVar("R")


def log_call(level: int = logging.DEBUG) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Return decorator logging entry/exit of the target function.

    Exceptions are logged with traceback and re-raised unchanged.
    """

    def _decorator(fn: Callable[P, R]) -> Callable[P, R]:
        logger = logging.getLogger(fn.__module__)

        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if logger.isEnabledFor(level):
                logger.log(level, "ENTER %s args=%s kwargs=%s", fn.__qualname__, _shorten(args), _shorten(kwargs))
            try:
                result = fn(*args, **kwargs)
            except Exception as e:  # noqa: BLE001
                logger.exception("ERROR in %s: %s", fn.__qualname__, e)
                raise
            if logger.isEnabledFor(level):
                logger.log(level, "EXIT %s -> %s", fn.__qualname__, _shorten(result))
            return result

        return wrapper

    return _decorator


def _shorten(obj: Any, limit: int = 120) -> str:
    """Return a truncated repr for logging (never raises)."""
    try:
        s = repr(obj)
    except Exception:  # noqa: BLE001
        return type(obj).__name__
    if len(s) > limit:
        return s[: limit - 3] + "..."
    return s
