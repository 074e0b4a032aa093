from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
)
_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SettingsError(RuntimeError):
    pass


def _lookup(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _lookup(environ, name)
    if raw is None:
        return default
    return raw.lower() in _TRUE_VALUES


def _origins(environ: Mapping[str, str], name: str) -> tuple[str, ...]:
    raw = _lookup(environ, name)
    if raw is None:
        return DEFAULT_CORS_ORIGINS
    origins = tuple(item.strip().rstrip("/") for item in raw.split(",") if item.strip())
    return origins or DEFAULT_CORS_ORIGINS


def _log_level(environ: Mapping[str, str], name: str) -> str:
    level = (_lookup(environ, name) or "INFO").upper()
    if level == "WARN":
        level = "WARNING"
    if level not in _LOG_LEVELS:
        raise SettingsError(f"{name} must be one of {', '.join(_LOG_LEVELS)}, got {level!r}")
    return level


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    rate_limit: str = "600/minute"
    scoring_rate_limit: str | None = None
    rate_limit_enabled: bool = True
    cors_allowed_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    scoring_config_path: str | None = None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from ``environ`` (the process environment by default)."""
    env = os.environ if environ is None else environ
    return Settings(
        log_level=_log_level(env, "LOG_LEVEL"),
        sentry_dsn=_lookup(env, "SENTRY_DSN"),
        rate_limit=_lookup(env, "RATE_LIMIT") or Settings.rate_limit,
        scoring_rate_limit=_lookup(env, "SCORING_RATE_LIMIT"),
        rate_limit_enabled=_flag(env, "RATE_LIMIT_ENABLED", True),
        cors_allowed_origins=_origins(env, "CORS_ALLOWED_ORIGINS"),
        scoring_config_path=_lookup(env, "SCORING_CONFIG_PATH"),
    )


settings = load_settings()

__all__ = ["Settings", "SettingsError", "load_settings", "settings"]
