"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

PLACEHOLDER_SECRET = "replace-me"


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "FinMind"
    DB_FILENAME = "finmind.db"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("FINMIND_SECRET_KEY", PLACEHOLDER_SECRET)
        self.JWT_SECRET = os.getenv("FINMIND_JWT_SECRET") or self.SECRET_KEY
        self.DEV_MODE = _env_bool("FINMIND_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("FINMIND_DATABASE_URL", self._build_sqlite_url())
        self.TOKEN_TTL_HOURS = _env_int("FINMIND_TOKEN_TTL_HOURS", 24)
        self.API_PREFIX = os.getenv("FINMIND_API_PREFIX", "/api/v1").rstrip("/")
        self.SEED_DEFAULTS = _env_bool("FINMIND_SEED_DEFAULTS", default=True)
        self.HOST = os.getenv("FINMIND_HOST", "127.0.0.1")
        self.PORT = _env_int("FINMIND_PORT", 8080)
        self.LOG_LEVEL = os.getenv("FINMIND_LOG_LEVEL", "INFO").upper()
        if self.TOKEN_TTL_HOURS <= 0:
            raise ValueError("FINMIND_TOKEN_TTL_HOURS must be positive.")
        if not self.DEV_MODE and self.JWT_SECRET == PLACEHOLDER_SECRET:
            raise ValueError("FINMIND_JWT_SECRET or FINMIND_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the SQLite file and logs."""

        data_root = os.getenv("FINMIND_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite."""

    TESTING = True
