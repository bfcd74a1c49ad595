"""Tests for environment-driven configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool

from dealercosts import config as config_module
from dealercosts.config import BaseConfig, DevConfig
from dealercosts.infra.database import bootstrap_database


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    for name in (
        "DEALERCOSTS_DATABASE_URL",
        "DEALERCOSTS_DEV_MODE",
        "DEALERCOSTS_SECRET_KEY",
        "DEALERCOSTS_DEALER_ID",
        "DEALERCOSTS_TEST_DATABASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DEALERCOSTS_DATA_DIR", str(tmp_path / "data"))


def test_defaults(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.DATABASE_URL == f"sqlite:///{config.DATA_DIR / 'dealercosts.db'}"
    assert config.DEV_MODE is True
    assert config.DEALER_ID == "default"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DEALERCOSTS_DATABASE_URL", "sqlite:///custom.db")
    monkeypatch.setenv("DEALERCOSTS_DEALER_ID", "north-branch")

    config = DevConfig()

    assert config.DATABASE_URL == "sqlite:///custom.db"
    assert config.DEALER_ID == "north-branch"
    assert config.DEBUG is True


@pytest.mark.parametrize("raw", ["0", "false", "no", "off"])
def test_production_requires_secret(monkeypatch, raw):
    monkeypatch.setenv("DEALERCOSTS_DEV_MODE", raw)

    with pytest.raises(ValueError, match="DEALERCOSTS_SECRET_KEY"):
        BaseConfig()

    monkeypatch.setenv("DEALERCOSTS_SECRET_KEY", "s3cret")
    assert BaseConfig().DEV_MODE is False


def test_sqlite_engine_options():
    options = BaseConfig().sqlalchemy_engine_options()

    assert options["connect_args"] == {"check_same_thread": False}
    assert "poolclass" not in options


def test_in_memory_database_shares_one_connection():
    config = config_module.TestConfig()

    assert config.DATABASE_URL == "sqlite://"
    assert config.sqlalchemy_engine_options()["poolclass"] is StaticPool


def test_bootstrap_in_memory_database_keeps_schema():
    """Sessions opened by the factory see the tables created at bootstrap."""
    from dealercosts.infra.repositories import SQLModelCostRepository

    engine, session_factory = bootstrap_database(config_module.TestConfig())
    try:
        repo = SQLModelCostRepository(session_factory)
        assert repo.list_all(dealer_id="default") == []
    finally:
        engine.dispose()


def test_bootstrap_creates_sqlite_file():
    config = BaseConfig()

    engine, _ = bootstrap_database(config)
    engine.dispose()

    assert Path(config.DATA_DIR / "dealercosts.db").exists()
