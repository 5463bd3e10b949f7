"""Settings loaded from environment variables.

- DUKE_DATA_PATH: task file (default data/duke.txt)
- DUKE_TEMP_PATH: scratch file used while rewriting the task file
- DUKE_LOG_LEVEL: console log level (default WARNING)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "DUKE"
DEFAULT_DATA_PATH = "data/duke.txt"
TEMP_SUFFIX = ".tmp"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _log_level(raw: Optional[str]) -> int:
    if raw is None:
        return logging.WARNING
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else logging.WARNING


def default_temp_path(data_path: Path) -> Path:
    """Temp file living next to the data file, so the rename stays on one filesystem."""
    return data_path.with_name(data_path.name + TEMP_SUFFIX)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for duke.

    Attributes:
        data_path: File holding one task per line
        temp_path: Scratch file renamed over data_path on every rewrite
        log_level: Level for the console log handler
    """

    data_path: Path
    temp_path: Path
    log_level: int = logging.WARNING


def get_settings() -> Settings:
    """Read settings from the environment.

    Returns:
        A fresh Settings instance; the environment is re-read on every call
    """
    data_path = Path(_env(_k("DATA_PATH"), DEFAULT_DATA_PATH))
    temp_raw = _env(_k("TEMP_PATH"))
    temp_path = Path(temp_raw) if temp_raw else default_temp_path(data_path)
    return Settings(
        data_path=data_path,
        temp_path=temp_path,
        log_level=_log_level(_env(_k("LOG_LEVEL"))),
    )
