from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

from infra.paths import DEFAULT_LOG_FILE

PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
JSON_LINE_FORMAT = (
    '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","msg":"%(message)s"}'
)

LogLevel = Union[str, int]

# Handlers added by configure_logging; only these are closed on reconfigure.
_installed: List[logging.Handler] = []


def _resolve_level(level: LogLevel) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _build_handlers(formatter: logging.Formatter, logfile: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if logfile is not None:
        logfile.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(
    level: LogLevel = "INFO",
    *,
    json: bool = False,
    logfile: str | Path | None = DEFAULT_LOG_FILE,
) -> None:
    """
    Route every engine, runner and API logger to stdout and, optionally, a file.

    Replaces whatever handlers the root logger had, so the CLI and the API
    startup can both call it.

    Args:
        level: Level name ("debug", "INFO") or number.
        json: One JSON object per line instead of the plain format.
        logfile: Append target; None keeps output on stdout only.

    Raises:
        ValueError: On an unknown level name
    """
    numeric_level = _resolve_level(level)
    formatter = logging.Formatter(JSON_LINE_FORMAT if json else PLAIN_FORMAT)
    handlers = _build_handlers(formatter, Path(logfile) if logfile is not None else None)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        if old in _installed:
            old.close()
    _installed[:] = handlers
    root.setLevel(numeric_level)
    for handler in handlers:
        root.addHandler(handler)

    logging.captureWarnings(True)


def get_logger(name: str) -> logging.Logger:
    """Module logger (`log = get_logger(__name__)`)."""
    return logging.getLogger(name)
