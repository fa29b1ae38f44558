"""
Environment-driven settings.

Blank or unparsable values fall back to defaults so a half-configured `.env`
never crashes startup. Only `DATABASE_URL` is mandatory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from . import db

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


def cors_allow_origins() -> tuple[str, ...]:
    return _env_list("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)


@dataclass(frozen=True)
class Settings:
    database_url: str
    db_pool_min_size: int = 1
    db_pool_max_size: int = 5
    db_command_timeout_s: float = 30.0
    cors_allow_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"


def load_settings() -> Settings:
    min_size = max(_env_int("DB_POOL_MIN_SIZE", 1), 0)
    max_size = max(_env_int("DB_POOL_MAX_SIZE", 5), 1)
    return Settings(
        database_url=db.database_url(),
        db_pool_min_size=min(min_size, max_size),
        db_pool_max_size=max_size,
        db_command_timeout_s=_env_float("DB_COMMAND_TIMEOUT_S", 30.0),
        cors_allow_origins=cors_allow_origins(),
        log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
