"""SQLAlchemy repository reading the debtor ledger."""

from sqlalchemy import bindparam, text

from wip_analytics.application.ports.database import DatabaseEnginePort
from wip_analytics.application.ports.debtor_repository import (
    DebtorTransactionRepositoryPort,
)
from wip_analytics.domain.models import DebtorTransaction
from wip_analytics.utils.decimal_utils import coerce_decimal


class SqlAlchemyDebtorTransactionRepository(DebtorTransactionRepositoryPort):
    """Repository that reads ``drs_transactions`` rows of a client set."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the practice engine.
        """
        self._db_port = db_port

    def fetch_transactions(
        self,
        client_ids: tuple[str, ...],
    ) -> list[DebtorTransaction]:
        if not client_ids:
            return []
        query = text(
            """
            SELECT tran_date,
                   total,
                   entry_type,
                   inv_number,
                   serv_line_code,
                   reference,
                   narration,
                   updated_at
            FROM drs_transactions
            WHERE gs_client_id IN :client_ids
            ORDER BY tran_date
            """
        ).bindparams(bindparam("client_ids", expanding=True))
        engine = self._db_port.get_practice_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                query,
                {"client_ids": list(client_ids)},
            ).all()
        return [
            DebtorTransaction(
                tran_date=row.tran_date,
                amount=coerce_decimal(row.total),
                entry_type=row.entry_type,
                invoice_number=row.inv_number,
                service_line=row.serv_line_code,
                reference=row.reference,
                narration=row.narration,
                updated_at=row.updated_at,
            )
            for row in rows
        ]


__all__ = ["SqlAlchemyDebtorTransactionRepository"]
