"""SQLAlchemy repository reading the WIP ledger."""

from datetime import date

from sqlalchemy import bindparam, text

from wip_analytics.application.ports.database import DatabaseEnginePort
from wip_analytics.application.ports.transaction_scope import TransactionScope
from wip_analytics.application.ports.wip_repository import (
    WipTransactionRepositoryPort,
)
from wip_analytics.domain.models import (
    DailyTypeSumRow,
    TypeSumRow,
    WipTransaction,
)
from wip_analytics.utils.decimal_utils import coerce_decimal

_WIP_COLUMNS = """
    tran_date,
    amount,
    t_type,
    tran_type,
    gs_task_id,
    gs_client_id,
    task_serv_line
"""


class SqlAlchemyWipTransactionRepository(WipTransactionRepositoryPort):
    """Repository that reads ``wip_transactions`` rows of a scope.

    A row belongs to the scope when its client is listed or its task is
    listed. The two sets are combined with ``UNION ALL``; task rows already
    matched through their client are excluded from the second branch so no
    row is counted twice.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the practice engine.
        """
        self._db_port = db_port

    def fetch_transactions(
        self,
        scope: TransactionScope,
        start_date: date,
        end_date: date,
    ) -> list[WipTransaction]:
        date_filter = "tran_date >= :start_date AND tran_date <= :end_date"
        rows = self._run(
            self._scoped_select(scope, date_filter) + " ORDER BY tran_date",
            scope,
            {"start_date": start_date, "end_date": end_date},
        )
        return [self._to_transaction(row) for row in rows]

    def fetch_transactions_before(
        self,
        scope: TransactionScope,
        cutoff: date,
    ) -> list[WipTransaction]:
        rows = self._run(
            self._scoped_select(scope, "tran_date < :cutoff"),
            scope,
            {"cutoff": cutoff},
        )
        return [self._to_transaction(row) for row in rows]

    def fetch_type_sums_before(
        self,
        scope: TransactionScope,
        cutoff: date,
    ) -> list[TypeSumRow]:
        inner = self._scoped_select(scope, "tran_date < :cutoff")
        rows = self._run(
            f"""
            SELECT scoped.t_type AS t_type,
                   scoped.tran_type AS tran_type,
                   SUM(scoped.amount) AS amount
            FROM ({inner}) AS scoped
            GROUP BY scoped.t_type, scoped.tran_type
            """,
            scope,
            {"cutoff": cutoff},
        )
        return [
            TypeSumRow(
                type_code=row.t_type,
                amount=coerce_decimal(row.amount),
                sub_type_code=row.tran_type,
            )
            for row in rows
        ]

    def fetch_daily_type_sums(
        self,
        scope: TransactionScope,
        start_date: date,
        end_date: date,
    ) -> list[DailyTypeSumRow]:
        inner = self._scoped_select(
            scope,
            "tran_date >= :start_date AND tran_date <= :end_date",
        )
        rows = self._run(
            f"""
            SELECT scoped.tran_date AS tran_date,
                   scoped.t_type AS t_type,
                   scoped.tran_type AS tran_type,
                   SUM(scoped.amount) AS amount
            FROM ({inner}) AS scoped
            GROUP BY scoped.tran_date, scoped.t_type, scoped.tran_type
            ORDER BY scoped.tran_date
            """,
            scope,
            {"start_date": start_date, "end_date": end_date},
        )
        return [
            DailyTypeSumRow(
                tran_date=row.tran_date,
                type_code=row.t_type,
                amount=coerce_decimal(row.amount),
                sub_type_code=row.tran_type,
            )
            for row in rows
        ]

    def fetch_all_transactions(
        self,
        scope: TransactionScope,
    ) -> list[WipTransaction]:
        rows = self._run(self._scoped_select(scope, None), scope, {})
        return [self._to_transaction(row) for row in rows]

    @staticmethod
    def _scoped_select(
        scope: TransactionScope,
        date_filter: str | None,
    ) -> str:
        """Return the UNION ALL statement selecting the rows of a scope.

        Args:
            scope: Clients and tasks of the report.
            date_filter: Optional SQL condition on ``tran_date``.

        Returns:
            str: SQL text using ``:client_ids`` and ``:task_ids`` parameters.
        """
        extra = f" AND {date_filter}" if date_filter else ""
        branches = []
        if scope.client_ids:
            branches.append(
                f"SELECT {_WIP_COLUMNS} FROM wip_transactions "
                f"WHERE gs_client_id IN :client_ids{extra}"
            )
        if scope.task_ids:
            client_guard = (
                " AND (gs_client_id IS NULL OR gs_client_id NOT IN :client_ids)"
                if scope.client_ids
                else ""
            )
            branches.append(
                f"SELECT {_WIP_COLUMNS} FROM wip_transactions "
                f"WHERE gs_task_id IN :task_ids{client_guard}{extra}"
            )
        return " UNION ALL ".join(branches)

    def _run(self, sql: str, scope: TransactionScope, params: dict) -> list:
        if scope.is_empty:
            return []
        query = text(sql)
        bound = dict(params)
        expanding = []
        if scope.client_ids:
            expanding.append(bindparam("client_ids", expanding=True))
            bound["client_ids"] = list(scope.client_ids)
        if scope.task_ids:
            expanding.append(bindparam("task_ids", expanding=True))
            bound["task_ids"] = list(scope.task_ids)
        query = query.bindparams(*expanding)
        engine = self._db_port.get_practice_engine()
        with engine.connect() as conn:
            return conn.execute(query, bound).all()

    @staticmethod
    def _to_transaction(row) -> WipTransaction:
        return WipTransaction(
            tran_date=row.tran_date,
            amount=coerce_decimal(row.amount),
            type_code=row.t_type,
            sub_type_code=row.tran_type,
            task_id=row.gs_task_id,
            client_id=row.gs_client_id,
            service_line=row.task_serv_line,
        )


__all__ = ["SqlAlchemyWipTransactionRepository"]
