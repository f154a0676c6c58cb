"""Use case to compute debtor aging and payment-speed analytics."""

from dataclasses import dataclass
from datetime import date, datetime

from wip_analytics.application.ports.debtor_repository import (
    DebtorTransactionRepositoryPort,
)
from wip_analytics.application.ports.result_cache import ResultCachePort
from wip_analytics.application.ports.service_line_repository import (
    ServiceLineRepositoryPort,
)
from wip_analytics.domain.constants import AGING_SCHEME_60
from wip_analytics.domain.models import AgingScheme, DebtorMetrics
from wip_analytics.domain.services import (
    aggregate_debtors_by_service_line,
    compute_debtor_metrics,
)
from wip_analytics.infrastructure.logging.logger import get_app_logger

DEFAULT_CACHE_TTL_SECONDS = 600


@dataclass(frozen=True)
class DebtorAnalyticsView:
    """Debtor metrics of a client set, overall and per service line.

    Attributes:
        overall: Metrics across every row.
        by_service_line: Metrics keyed by master service-line code.
        service_line_names: Display names of the master codes present.
        transaction_count: Number of debtor rows analysed.
        last_updated: Latest ``updated_at`` stamp among the rows, if any.
    """

    overall: DebtorMetrics
    by_service_line: dict[str, DebtorMetrics]
    service_line_names: dict[str, str]
    transaction_count: int
    last_updated: datetime | None = None


class GetDebtorAnalyticsUseCase:
    """Compute aged balances and payment-speed metrics for clients."""

    def __init__(
        self,
        debtor_repository: DebtorTransactionRepositoryPort,
        service_line_repository: ServiceLineRepositoryPort | None = None,
        cache: ResultCachePort | None = None,
        logger=None,
        scheme: AgingScheme = AGING_SCHEME_60,
        cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
    ) -> None:
        """Initialize the use case.

        Args:
            debtor_repository: Port providing debtor rows.
            service_line_repository: Optional port providing service-line
                mappings; without it every row maps to ``UNKNOWN``.
            cache: Optional result cache.
            logger: Optional logger compatible with logging.Logger-like API.
            scheme: Aging scheme applied to balances.
            cache_ttl_seconds: Expiry of cached results.
        """
        self._debtor_repository = debtor_repository
        self._service_line_repository = service_line_repository
        self._cache = cache
        self._logger = logger or get_app_logger()
        self._scheme = scheme
        self._cache_ttl_seconds = cache_ttl_seconds

    def execute(
        self,
        client_ids: tuple[str, ...],
        today: date | None = None,
    ) -> DebtorAnalyticsView:
        """Return debtor analytics for the given clients.

        Args:
            client_ids: Clients whose debtor rows are analysed.
            today: Reference date for aging; defaults to the current date.

        Returns:
            DebtorAnalyticsView: Overall and per-service-line metrics.
        """
        reference = today or date.today()
        cache_key = (
            f"debtor-analytics:{','.join(sorted(client_ids))}:"
            f"{reference.isoformat()}:{self._scheme.name}"
        )
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                self._logger.info(f"Debtor analytics cache hit: {cache_key}")
                return cached

        rows = self._debtor_repository.fetch_transactions(tuple(client_ids))
        self._logger.info(
            f"Fetched {len(rows)} debtor rows for {len(client_ids)} clients"
        )

        service_line_map: dict[str, str] = {}
        names: dict[str, str] = {}
        if self._service_line_repository is not None:
            service_line_map = (
                self._service_line_repository.fetch_service_line_mappings()
            )
            names = (
                self._service_line_repository.fetch_master_service_line_names()
            )

        overall = compute_debtor_metrics(rows, reference, self._scheme)
        by_service_line = aggregate_debtors_by_service_line(
            rows,
            service_line_map,
            reference,
            self._scheme,
        )
        stamps = [row.updated_at for row in rows if row.updated_at is not None]
        view = DebtorAnalyticsView(
            overall=overall,
            by_service_line=by_service_line,
            service_line_names={
                code: names[code] for code in by_service_line if code in names
            },
            transaction_count=len(rows),
            last_updated=max(stamps) if stamps else None,
        )
        self._logger.info(
            f"Debtor analytics computed: balance={overall.total_balance}, "
            f"service lines={len(by_service_line)}"
        )
        if self._cache is not None:
            self._cache.set(cache_key, view, self._cache_ttl_seconds)
        return view


__all__ = ["GetDebtorAnalyticsUseCase", "DebtorAnalyticsView"]
