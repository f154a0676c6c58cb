"""CLI adapter printing the WIP position of a client or task.

The scope is read from the environment: ``REPORT_CLIENT_ID`` and/or a
comma-separated ``REPORT_TASK_IDS``. ``REPORT_START_DATE``,
``REPORT_END_DATE`` and ``REPORT_RESOLUTION`` refine the window.
"""

from datetime import date
import os

from wip_analytics.application.ports.transaction_scope import TransactionScope
from wip_analytics.infrastructure.container import (
    build_database_adapter,
    build_wip_analytics_use_case,
    build_wip_balances_use_case,
)
from wip_analytics.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from wip_analytics.infrastructure.settings import AnalyticsSettings


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def _parse_ids(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated identifier list, dropping blanks."""
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _build_scope(
    client_id: str | None,
    task_ids: tuple[str, ...],
) -> TransactionScope | None:
    if client_id:
        return TransactionScope.for_client(client_id, task_ids)
    if len(task_ids) == 1:
        return TransactionScope.for_task(task_ids[0])
    if task_ids:
        return TransactionScope(task_ids=task_ids)
    return None


def main() -> None:
    """Compute and print the WIP summary of the configured scope."""
    logger = get_app_logger()
    client_id = (os.getenv("REPORT_CLIENT_ID") or "").strip() or None
    task_ids = _parse_ids(os.getenv("REPORT_TASK_IDS"))
    scope = _build_scope(client_id, task_ids)
    if scope is None:
        logger.warning(
            "REPORT_CLIENT_ID or REPORT_TASK_IDS is required for a WIP report."
        )
        return

    get_usage_logger().info(f"wip_report {scope.cache_token}")
    settings = AnalyticsSettings.from_env()
    resolution = os.getenv("REPORT_RESOLUTION", settings.default_resolution)
    start_date = _parse_date(os.getenv("REPORT_START_DATE"), logger)
    end_date = _parse_date(os.getenv("REPORT_END_DATE"), logger)

    db_adapter = build_database_adapter()
    analytics = build_wip_analytics_use_case(db_adapter, settings=settings)
    balances = build_wip_balances_use_case(db_adapter)

    view = analytics.execute(
        scope,
        start_date=start_date,
        end_date=end_date,
        resolution=resolution,
    )
    breakdown = balances.execute(scope)

    summary = view.overall.summary
    print(
        f"WIP report for {view.scope_label} "
        f"({view.start_date} to {view.end_date}, "
        f"resolution={view.resolution}, points={len(view.overall.daily_metrics)})"
    )
    print(
        f"Opening={summary.opening_balance}, "
        f"production={summary.total_production}, "
        f"adjustments={summary.total_adjustments}, "
        f"disbursements={summary.total_disbursements}, "
        f"billing={summary.total_billing}, "
        f"provisions={summary.total_provisions}, "
        f"current={summary.current_wip_balance}"
    )
    for code, series in sorted(view.by_service_line.items()):
        name = view.service_line_names.get(code, code)
        print(f"  {name}: {series.summary.current_wip_balance}")
    print(
        f"Lifetime: gross={breakdown.gross_wip}, net={breakdown.net_wip}, "
        f"fees={breakdown.fees}, provision={breakdown.provision}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
