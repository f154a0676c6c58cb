"""Database infrastructure for the practice analytics engine.

This module exposes concrete helpers to create and reuse a SQLAlchemy engine
connected to the practice-management database holding the WIP and debtor
ledgers. It belongs to the infrastructure layer because it deals with
external systems.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from wip_analytics.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Values from a ``.env`` file are loaded first without overriding the
    process environment.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the practice database.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_practice_engine: Optional[Engine] = None


def get_practice_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the practice database.

    Returns:
        Engine: Lazily initialized engine connected to the ledger tables.
    """
    global _practice_engine
    if _practice_engine is None:
        db_url = _get_env_var("PRACTICE_DB_URL")
        _practice_engine = _create_engine(db_url)
    return _practice_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application use cases can depend only on the protocol.
    """

    def get_practice_engine(self) -> Engine:
        """Get the engine for the practice database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger tables.
        """
        return get_practice_engine()


__all__ = [
    "get_practice_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
