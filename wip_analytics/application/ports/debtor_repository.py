"""Port for reading debtor ledger rows."""

from typing import Protocol

from wip_analytics.domain.models import DebtorTransaction


class DebtorTransactionRepositoryPort(Protocol):
    """Port exposing debtor rows of a set of clients."""

    def fetch_transactions(
        self,
        client_ids: tuple[str, ...],
    ) -> list[DebtorTransaction]:
        """Return every debtor row of the given clients."""


__all__ = ["DebtorTransactionRepositoryPort"]
