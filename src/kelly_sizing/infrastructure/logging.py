from __future__ import annotations

import logging
import os
from typing import Any, Final

RESET: Final[str] = "\033[0m"
COLOR_MAP: Final[dict[int, str]] = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[41m",
}

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRS: Final[frozenset[str]] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def _format_extras(record: logging.LogRecord) -> str:
    extras: dict[str, Any] = {
        key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS
    }
    if not extras:
        return ""
    return " | " + " ".join(f"{key}={value}" for key, value in sorted(extras.items()))


class ColorFormatter(logging.Formatter):
    def __init__(self, fmt: str, datefmt: str | None = None, use_color: bool = True) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record) + _format_extras(record)
        if not self.use_color:
            return message
        color = COLOR_MAP.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{RESET}"


def _resolve_log_level() -> int:
    level = os.getenv("KELLY_LOG_LEVEL") or os.getenv("LOG_LEVEL", "INFO")
    return getattr(logging, level.upper(), logging.INFO)


def _use_color() -> bool:
    if os.getenv("NO_COLOR"):
        return False
    term = os.getenv("TERM", "")
    return term != "dumb"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_log_level())
    handler = logging.StreamHandler()
    formatter = ColorFormatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        use_color=_use_color(),
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
