"""Tests for the infrastructure.db module."""

import pytest

from wip_analytics.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    loaded = []
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: loaded.append(1))
    monkeypatch.setenv("PRACTICE_DB_URL", "postgresql://practice")

    assert db_module._get_env_var("PRACTICE_DB_URL") == "postgresql://practice"
    assert loaded == [1]


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError naming the variable."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("PRACTICE_DB_URL", raising=False)

    with pytest.raises(RuntimeError, match="PRACTICE_DB_URL"):
        db_module._get_env_var("PRACTICE_DB_URL")


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("mssql+pyodbc://practice")

    assert engine == "engine"
    assert captured["db_url"] == "mssql+pyodbc://practice"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_get_practice_engine_caches_engine(monkeypatch):
    """get_practice_engine should memoize the created engine."""
    monkeypatch.setattr(db_module, "_practice_engine", None)
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("PRACTICE_DB_URL", "postgresql://practice")

    engine_one = db_module.get_practice_engine()
    engine_two = db_module.get_practice_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:postgresql://practice"
    assert created == ["postgresql://practice"]


def test_adapter_returns_underlying_engine(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy the global helper."""
    monkeypatch.setattr(
        db_module,
        "get_practice_engine",
        lambda: "practice_engine",
    )

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()

    assert adapter.get_practice_engine() == "practice_engine"
