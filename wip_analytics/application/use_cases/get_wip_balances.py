"""Use case to compute the lifetime WIP breakdown of a scope."""

from wip_analytics.application.ports.transaction_scope import TransactionScope
from wip_analytics.application.ports.wip_repository import (
    WipTransactionRepositoryPort,
)
from wip_analytics.domain.models import WipBreakdown
from wip_analytics.domain.services import compute_wip_breakdown
from wip_analytics.infrastructure.logging.logger import get_app_logger


class GetWipBalancesUseCase:
    """Compute time, disbursement, fee and provision balances of a scope."""

    def __init__(
        self,
        wip_repository: WipTransactionRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            wip_repository: Port providing scoped WIP rows.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._wip_repository = wip_repository
        self._logger = logger or get_app_logger()

    def execute(self, scope: TransactionScope) -> WipBreakdown:
        """Return the WIP breakdown over every row of the scope.

        Args:
            scope: Clients and tasks whose rows are reported.

        Returns:
            WipBreakdown: Component totals with gross and net WIP.
        """
        rows = self._wip_repository.fetch_all_transactions(scope)
        self._logger.info(
            f"Fetched {len(rows)} WIP rows for balances of {scope.cache_token}"
        )
        breakdown = compute_wip_breakdown(rows)
        self._logger.info(
            f"WIP balances for {scope.cache_token}: "
            f"gross={breakdown.gross_wip}, net={breakdown.net_wip}"
        )
        return breakdown


__all__ = ["GetWipBalancesUseCase"]
