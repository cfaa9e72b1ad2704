from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_LOG_LEVEL_ENV = "LOG_LEVEL"
_DIAGNOSTICS_PATH_ENV = "BATTMON_DIAGNOSTICS_PATH"


@dataclass(frozen=True)
class Settings:
    log_level: str
    diagnostics_path: Optional[str]


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_log_level("WARNING"),
        diagnostics_path=_read_optional_env(_DIAGNOSTICS_PATH_ENV, "./tmp/battery-monitor.log"),
    )
