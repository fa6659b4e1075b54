"""
Environment-backed settings.

Values are read on every call so tests can override them with monkeypatch.
"""

from __future__ import annotations

import os


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def app_env() -> str:
    return env_str("APP_ENV", "development")


def app_version() -> str:
    return env_str("APP_VERSION", "1.0.0")


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()


def cors_allowed_origins() -> list[str]:
    raw = env_str("CORS_ALLOWED_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def list_query_timeout_seconds() -> float:
    return env_float("LIST_QUERY_TIMEOUT_SECONDS", 3.0)
