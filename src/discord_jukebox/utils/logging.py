"""Colored logging formatter for console output."""

from __future__ import annotations

import logging
import os
import sys


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name and dims the logger name.

    ``NO_COLOR`` disables colors, ``FORCE_COLOR`` enables them even when the
    stream is not a TTY (e.g. under a process manager that keeps ANSI codes).
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    DIM = "\033[2m"
    RESET = "\033[0m"

    def __init__(self, *args, stream=None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._stream = stream

    def _use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        if os.environ.get("FORCE_COLOR") is not None:
            return True
        stream = self._stream or sys.stdout
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self._use_color():
            return super().format(record)

        color = self.COLORS.get(record.levelno, "")
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        colored.name = f"{self.DIM}{record.name}{self.RESET}"
        return super().format(colored)
