"""CLI adapter printing the debtor position of a client.

Reads ``REPORT_CLIENT_ID`` (comma-separated for a group) and an optional
``REPORT_AS_OF`` reference date from the environment.
"""

from datetime import date
import os

from wip_analytics.infrastructure.container import (
    build_database_adapter,
    build_debtor_analytics_use_case,
    build_debtor_invoice_details_use_case,
)
from wip_analytics.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from wip_analytics.infrastructure.settings import AnalyticsSettings


def _format_days(value) -> str:
    if value is None:
        return "n/a"
    return f"{value:.1f}"


def main() -> None:
    """Compute and print aged balances and open invoices."""
    logger = get_app_logger()
    raw_ids = os.getenv("REPORT_CLIENT_ID") or ""
    client_ids = tuple(part.strip() for part in raw_ids.split(",") if part.strip())
    if not client_ids:
        logger.warning("REPORT_CLIENT_ID is required for a debtor report.")
        return

    get_usage_logger().info(f"debtor_report {','.join(client_ids)}")
    today = None
    raw_as_of = os.getenv("REPORT_AS_OF")
    if raw_as_of:
        try:
            today = date.fromisoformat(raw_as_of)
        except ValueError:
            logger.warning(
                f"Invalid date '{raw_as_of}'. Expected format YYYY-MM-DD."
            )

    settings = AnalyticsSettings.from_env()
    db_adapter = build_database_adapter()
    analytics = build_debtor_analytics_use_case(db_adapter, settings=settings)
    details = build_debtor_invoice_details_use_case(
        db_adapter,
        settings=settings,
    )

    view = analytics.execute(client_ids, today=today)
    report = details.execute(client_ids, today=today)

    overall = view.overall
    print(
        f"Debtors for {', '.join(client_ids)}: "
        f"balance={overall.total_balance}, "
        f"transactions={view.transaction_count}, "
        f"invoices={overall.invoice_count}"
    )
    print(
        "Aging: "
        + ", ".join(
            f"{key}={amount}" for key, amount in overall.aging.amounts
        )
    )
    print(
        f"Average days to pay={_format_days(overall.avg_payment_days_paid)}, "
        f"average days outstanding="
        f"{_format_days(overall.avg_payment_days_outstanding)}"
    )
    for code, metrics in sorted(view.by_service_line.items()):
        name = view.service_line_names.get(code, code)
        print(f"  {name}: {metrics.total_balance}")
    print(
        f"Open invoices={report.invoice_count}, "
        f"outstanding={report.total_outstanding}"
    )
    for key, invoices in report.buckets.items():
        if invoices:
            print(f"  {report.bucket_labels[key]}: {len(invoices)}")


if __name__ == "__main__":  # pragma: no cover
    main()
