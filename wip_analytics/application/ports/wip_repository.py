"""Port for reading WIP ledger rows."""

from datetime import date
from typing import Protocol

from wip_analytics.application.ports.transaction_scope import TransactionScope
from wip_analytics.domain.models import (
    DailyTypeSumRow,
    TypeSumRow,
    WipTransaction,
)


class WipTransactionRepositoryPort(Protocol):
    """Port exposing WIP rows already filtered to a scope."""

    def fetch_transactions(
        self,
        scope: TransactionScope,
        start_date: date,
        end_date: date,
    ) -> list[WipTransaction]:
        """Return rows dated within the inclusive window."""

    def fetch_transactions_before(
        self,
        scope: TransactionScope,
        cutoff: date,
    ) -> list[WipTransaction]:
        """Return rows dated strictly before ``cutoff``."""

    def fetch_type_sums_before(
        self,
        scope: TransactionScope,
        cutoff: date,
    ) -> list[TypeSumRow]:
        """Return amounts summed per type code strictly before ``cutoff``."""

    def fetch_daily_type_sums(
        self,
        scope: TransactionScope,
        start_date: date,
        end_date: date,
    ) -> list[DailyTypeSumRow]:
        """Return amounts summed per day and type code within the window."""

    def fetch_all_transactions(
        self,
        scope: TransactionScope,
    ) -> list[WipTransaction]:
        """Return every row of the scope regardless of date."""


__all__ = ["WipTransactionRepositoryPort"]
