"""Leveled messages written to standard error."""

from __future__ import annotations

import os
import sys
import threading
from enum import Enum
from typing import TextIO


class Level(Enum):
    """Severity of a log message."""

    WARN = "WARN"
    ERROR = "ERROR"
    PANIC = "PANIC"

    def __str__(self) -> str:
        return self.value


_COLORS = {
    Level.WARN: "\x1b[33m",
    Level.ERROR: "\x1b[31m",
    Level.PANIC: "\x1b[31m",
}
_RESET = "\x1b[39m"
_lock = threading.Lock()


def _use_color(stream: TextIO) -> bool:
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _label(level: Level, color: bool) -> str:
    if color:
        return f"{_COLORS[level]}{level}{_RESET}"
    return str(level)


def format_message(level: Level, message: object) -> str:
    """Render ``message`` with its level prefix."""
    return f"{level}: {message}"


def write(level: Level, message: object) -> None:
    """Write one message line to standard error."""
    stream = sys.stderr
    text = f"{_label(level, _use_color(stream))}: {message}\n"
    with _lock:
        stream.write(text)
        stream.flush()


def warn(message: object) -> None:
    write(Level.WARN, message)


def error(message: object) -> None:
    write(Level.ERROR, message)