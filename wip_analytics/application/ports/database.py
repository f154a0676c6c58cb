"""Database ports for the practice analytics engine.

This module defines the application-layer protocol for accessing the
practice-management database. Infrastructure implementations are expected to
provide concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the practice-management database.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_practice_engine(self) -> Engine:
        """Get the engine for the practice-management database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger tables.
        """


__all__ = ["DatabaseEnginePort"]
