"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DealerCosts"
    DB_FILENAME = "dealercosts.db"
    EXPORT_PREFIX = "dealership-costs"

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("DEALERCOSTS_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("DEALERCOSTS_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("DEALERCOSTS_DATABASE_URL", self._build_sqlite_url())
        self.DEALER_ID = os.getenv("DEALERCOSTS_DEALER_ID", "default")
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("DEALERCOSTS_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("DEALERCOSTS_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        engine_options: dict[str, Any] = {"connect_args": connect_args}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        if self.DATABASE_URL in {"sqlite://", "sqlite:///:memory:"}:
            # One shared connection, otherwise every session sees an empty database.
            engine_options["poolclass"] = StaticPool
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration for the test suite; in-memory database unless overridden."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
        self.DATABASE_URL = os.getenv("DEALERCOSTS_TEST_DATABASE_URL", "sqlite://")
