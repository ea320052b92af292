"""Settings for user-manager, read once from the environment at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


# Default values - use these constants instead of hardcoding values elsewhere
DEFAULT_ARCHIVE_DIR = Path("/archive")
DEFAULT_LOG_FILE = Path("/var/log/user_management.log")
DEFAULT_HOME_ROOT = Path("/home")
DEFAULT_MIN_HUMAN_UID = 1000

ENV_ARCHIVE_DIR = "USER_MANAGER_ARCHIVE_DIR"
ENV_LOG_FILE = "USER_MANAGER_LOG_FILE"
ENV_HOME_ROOT = "USER_MANAGER_HOME_ROOT"
ENV_MIN_HUMAN_UID = "USER_MANAGER_MIN_HUMAN_UID"
ENV_DEBUG = "USER_MANAGER_DEBUG"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    archive_dir: Path = DEFAULT_ARCHIVE_DIR
    log_file: Path = DEFAULT_LOG_FILE
    home_root: Path = DEFAULT_HOME_ROOT
    min_human_uid: int = DEFAULT_MIN_HUMAN_UID
    debug: bool = False

    def default_home(self, username: str) -> Path:
        return self.home_root / username

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            archive_dir=Path(env.get(ENV_ARCHIVE_DIR) or DEFAULT_ARCHIVE_DIR),
            log_file=Path(env.get(ENV_LOG_FILE) or DEFAULT_LOG_FILE),
            home_root=Path(env.get(ENV_HOME_ROOT) or DEFAULT_HOME_ROOT),
            min_human_uid=_parse_int(env.get(ENV_MIN_HUMAN_UID), DEFAULT_MIN_HUMAN_UID),
            debug=(env.get(ENV_DEBUG) or "").strip().lower() in _TRUE_VALUES,
        )


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    return Settings.from_env(environ)
