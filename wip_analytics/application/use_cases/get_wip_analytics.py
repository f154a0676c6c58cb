"""Use case to compute WIP time series for a client, task or group."""

from collections import Counter
from dataclasses import dataclass, replace
from datetime import date

from wip_analytics.application.ports.result_cache import ResultCachePort
from wip_analytics.application.ports.service_line_repository import (
    ServiceLineRepositoryPort,
)
from wip_analytics.application.ports.transaction_scope import TransactionScope
from wip_analytics.application.ports.wip_repository import (
    WipTransactionRepositoryPort,
)
from wip_analytics.domain.constants import (
    DEFAULT_LOOKBACK_MONTHS,
    UNKNOWN_SERVICE_LINE,
)
from wip_analytics.domain.models import WipSeries, WipTransaction
from wip_analytics.domain.policies import (
    normalize_resolution,
    resolve_target_points,
)
from wip_analytics.domain.services import (
    aggregate_daily_metrics,
    aggregate_daily_type_sums,
    compute_opening_balance,
    compute_opening_balance_from_type_sums,
    downsample_daily_metrics,
    partition_by_service_line,
)
from wip_analytics.infrastructure.logging.logger import get_app_logger
from wip_analytics.utils.date_utils import subtract_months

DEFAULT_CACHE_TTL_SECONDS = 600


@dataclass(frozen=True)
class WipAnalyticsView:
    """WIP series of a scope, overall and per master service line."""

    scope_label: str
    start_date: date
    end_date: date
    resolution: str
    target_points: int
    overall: WipSeries
    by_service_line: dict[str, WipSeries]
    service_line_names: dict[str, str]


class GetWipAnalyticsUseCase:
    """Compute downsampled WIP series from ledger rows."""

    def __init__(
        self,
        wip_repository: WipTransactionRepositoryPort,
        service_line_repository: ServiceLineRepositoryPort | None = None,
        cache: ResultCachePort | None = None,
        logger=None,
        lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
        cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
    ) -> None:
        """Initialize the use case.

        Args:
            wip_repository: Port providing scoped WIP rows.
            service_line_repository: Optional port providing service-line
                mappings; without it no per-service-line series are built.
            cache: Optional result cache.
            logger: Optional logger compatible with logging.Logger-like API.
            lookback_months: Window length used when no start date is given.
            cache_ttl_seconds: Expiry of cached results.
        """
        self._wip_repository = wip_repository
        self._service_line_repository = service_line_repository
        self._cache = cache
        self._logger = logger or get_app_logger()
        self._lookback_months = lookback_months
        self._cache_ttl_seconds = cache_ttl_seconds

    def execute(
        self,
        scope: TransactionScope,
        start_date: date | None = None,
        end_date: date | None = None,
        resolution: str | None = "standard",
        today: date | None = None,
        by_service_line: bool = True,
    ) -> WipAnalyticsView:
        """Return WIP series for the scope and window.

        Args:
            scope: Clients and tasks whose rows are reported.
            start_date: First day of the window; defaults to
                ``lookback_months`` before ``end_date``.
            end_date: Last day of the window; defaults to ``today``.
            resolution: Chart resolution (``low``, ``standard``, ``high``).
            today: Reference date; defaults to the current date.
            by_service_line: Whether to build one series per master service
                line. When False, source-side sums are used instead of rows.

        Returns:
            WipAnalyticsView: Overall and per-service-line series.
        """
        reference = today or date.today()
        window_end = end_date or reference
        window_start = start_date or subtract_months(
            window_end,
            self._lookback_months,
        )
        resolution_name = normalize_resolution(resolution)
        target_points = resolve_target_points(resolution_name)
        split = by_service_line and self._service_line_repository is not None

        cache_key = self._build_cache_key(
            scope,
            window_start,
            window_end,
            resolution_name,
            split,
        )
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                self._logger.info(f"WIP analytics cache hit: {cache_key}")
                return cached

        if split:
            view = self._build_split_view(
                scope,
                window_start,
                window_end,
                resolution_name,
                target_points,
            )
        else:
            view = self._build_overall_view(
                scope,
                window_start,
                window_end,
                resolution_name,
                target_points,
            )

        if self._cache is not None:
            self._cache.set(cache_key, view, self._cache_ttl_seconds)
        return view

    def _build_overall_view(
        self,
        scope: TransactionScope,
        start_date: date,
        end_date: date,
        resolution: str,
        target_points: int,
    ) -> WipAnalyticsView:
        type_sums = self._wip_repository.fetch_type_sums_before(
            scope,
            start_date,
        )
        daily_sums = self._wip_repository.fetch_daily_type_sums(
            scope,
            start_date,
            end_date,
        )
        opening_balance = compute_opening_balance_from_type_sums(type_sums)
        self._logger.info(
            f"Fetched {len(daily_sums)} daily type sums for {scope.cache_token} "
            f"(opening balance={opening_balance})"
        )
        series = aggregate_daily_type_sums(daily_sums, opening_balance)
        overall = self._downsample(series, target_points)
        self._log_summary(scope, overall)
        return WipAnalyticsView(
            scope_label=scope.cache_token,
            start_date=start_date,
            end_date=end_date,
            resolution=resolution,
            target_points=target_points,
            overall=overall,
            by_service_line={},
            service_line_names={},
        )

    def _build_split_view(
        self,
        scope: TransactionScope,
        start_date: date,
        end_date: date,
        resolution: str,
        target_points: int,
    ) -> WipAnalyticsView:
        opening_rows = self._wip_repository.fetch_transactions_before(
            scope,
            start_date,
        )
        rows = self._wip_repository.fetch_transactions(
            scope,
            start_date,
            end_date,
        )
        self._log_fetch(scope, rows, opening_rows)

        service_line_map = (
            self._service_line_repository.fetch_service_line_mappings()
        )
        opening_by_line = partition_by_service_line(
            opening_rows,
            service_line_map,
        )
        rows_by_line = partition_by_service_line(rows, service_line_map)

        opening_balance = compute_opening_balance(opening_rows, start_date)
        overall = self._downsample(
            aggregate_daily_metrics(rows, opening_balance),
            target_points,
        )

        by_service_line: dict[str, WipSeries] = {}
        for master_code, line_rows in rows_by_line.items():
            line_opening = compute_opening_balance(
                opening_by_line.get(master_code, []),
                start_date,
            )
            by_service_line[master_code] = self._downsample(
                aggregate_daily_metrics(line_rows, line_opening),
                target_points,
            )

        names = self._service_line_repository.fetch_master_service_line_names()
        service_line_names = {
            code: names[code]
            for code in by_service_line
            if code != UNKNOWN_SERVICE_LINE and code in names
        }
        self._log_summary(scope, overall)
        return WipAnalyticsView(
            scope_label=scope.cache_token,
            start_date=start_date,
            end_date=end_date,
            resolution=resolution,
            target_points=target_points,
            overall=overall,
            by_service_line=by_service_line,
            service_line_names=service_line_names,
        )

    @staticmethod
    def _downsample(series: WipSeries, target_points: int) -> WipSeries:
        return replace(
            series,
            daily_metrics=downsample_daily_metrics(
                series.daily_metrics,
                target_points,
            ),
        )

    def _log_fetch(
        self,
        scope: TransactionScope,
        rows: list[WipTransaction],
        opening_rows: list[WipTransaction],
    ) -> None:
        by_type = Counter(row.type_code for row in rows)
        task_only = sum(
            1 for row in rows if row.client_id is None and row.task_id
        )
        self._logger.info(
            f"Fetched {len(rows)} WIP rows and {len(opening_rows)} opening "
            f"rows for {scope.cache_token}; by type={dict(by_type)}, "
            f"task-only rows={task_only}"
        )

    def _log_summary(self, scope: TransactionScope, series: WipSeries) -> None:
        summary = series.summary
        self._logger.info(
            f"WIP analytics computed for {scope.cache_token}: "
            f"points={len(series.daily_metrics)}, "
            f"opening={summary.opening_balance}, "
            f"current={summary.current_wip_balance}"
        )

    @staticmethod
    def _build_cache_key(
        scope: TransactionScope,
        start_date: date,
        end_date: date,
        resolution: str,
        split: bool,
    ) -> str:
        mode = "split" if split else "overall"
        return (
            f"wip-analytics:{scope.cache_token}:{start_date.isoformat()}:"
            f"{end_date.isoformat()}:{resolution}:{mode}"
        )


__all__ = ["GetWipAnalyticsUseCase", "WipAnalyticsView"]
