"""SQLAlchemy repository reading service-line reference tables."""

from sqlalchemy import text

from wip_analytics.application.ports.database import DatabaseEnginePort
from wip_analytics.application.ports.service_line_repository import (
    ServiceLineRepositoryPort,
)


class SqlAlchemyServiceLineRepository(ServiceLineRepositoryPort):
    """Repository that reads external-to-master service-line mappings."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the practice engine.
        """
        self._db_port = db_port

    def fetch_service_line_mappings(self) -> dict[str, str]:
        query = text(
            """
            SELECT serv_line_code, master_code
            FROM service_line_external
            WHERE master_code IS NOT NULL
            """
        )
        engine = self._db_port.get_practice_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return {
            row.serv_line_code.strip(): row.master_code
            for row in rows
            if row.serv_line_code and row.serv_line_code.strip()
        }

    def fetch_master_service_line_names(self) -> dict[str, str]:
        query = text(
            """
            SELECT code, name
            FROM service_line_master
            ORDER BY code
            """
        )
        engine = self._db_port.get_practice_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return {row.code: row.name for row in rows}


__all__ = ["SqlAlchemyServiceLineRepository"]
