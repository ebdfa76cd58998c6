"""
Process settings read from the environment.

A `.env` file in the working directory is loaded first (python-dotenv),
then these variables are read:

- CONQUEST_LOG_LEVEL: logging level name (default INFO)
- CONQUEST_LOG_JSON: "1"/"true"/"yes" for JSON log lines
- CONQUEST_LOG_FILE: log file path, or "none" to disable file output
- CONQUEST_MAX_TURNS: optional turn limit for games started by the API
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from infra.logger import configure_logging
from infra.paths import DEFAULT_LOG_FILE

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[Path] = DEFAULT_LOG_FILE
    max_turns: Optional[int] = None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> Settings:
        if dotenv:
            load_dotenv()

        log_file_raw = os.getenv("CONQUEST_LOG_FILE")
        if log_file_raw is None:
            log_file: Optional[Path] = DEFAULT_LOG_FILE
        elif log_file_raw.strip().lower() in ("", "none"):
            log_file = None
        else:
            log_file = Path(log_file_raw)

        max_turns_raw = os.getenv("CONQUEST_MAX_TURNS", "").strip()
        try:
            max_turns = int(max_turns_raw) if max_turns_raw else None
        except ValueError as exc:
            raise ValueError(f"CONQUEST_MAX_TURNS must be an integer, got {max_turns_raw!r}") from exc
        if max_turns is not None and max_turns <= 0:
            raise ValueError(f"CONQUEST_MAX_TURNS must be positive, got {max_turns}")

        return cls(
            log_level=os.getenv("CONQUEST_LOG_LEVEL", "INFO").upper(),
            log_json=os.getenv("CONQUEST_LOG_JSON", "").strip().lower() in _TRUTHY,
            log_file=log_file,
            max_turns=max_turns,
        )

    def apply_logging(self) -> None:
        configure_logging(self.log_level, json=self.log_json, logfile=self.log_file)
