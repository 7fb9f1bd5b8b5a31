"""Application settings.

Fixed values live in the CONFIG section; per-user values come from
``SIMPLETASKLIST_*`` environment variables and may be overridden on the
command line.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# -------------------------------
# CONFIG
# -------------------------------
APP_NAME = "simpletasklist"
DATE_PATTERN = "yyyy-mm-dd"  # tkcalendar notation of todotxt.DATE_FORMAT
TASK_FILE_PATTERNS = ("*.txt",)
WINDOW_GEOMETRY = "1000x640"
DIALOG_GEOMETRY = "560x620"

ENV_PREFIX = "SIMPLETASKLIST"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True)
class Settings:
    language: str
    log_level: str
    log_dir: Path | None
    default_file: Path | None
    appearance: str
    theme: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            language=_env(_k("LANGUAGE"), "en"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            log_dir=_env_path(_k("LOG_DIR")),
            default_file=_env_path(_k("DEFAULT_FILE")),
            appearance=_env(_k("APPEARANCE"), "dark"),
            theme=_env(_k("THEME"), "dark-blue"),
        )
