"""Streamlit dashboard entry point."""

from decimal import Decimal

import streamlit as st
import altair as alt

from wip_analytics.application.ports.transaction_scope import TransactionScope
from wip_analytics.application.use_cases.get_debtor_analytics import (
    DebtorAnalyticsView,
)
from wip_analytics.application.use_cases.get_debtor_invoice_details import (
    InvoiceDetailsReport,
)
from wip_analytics.application.use_cases.get_wip_analytics import (
    WipAnalyticsView,
)
from wip_analytics.domain.constants import RESOLUTION_TARGET_POINTS
from wip_analytics.domain.models import AgingScheme, WipSeries
from wip_analytics.infrastructure.container import (
    build_debtor_analytics_use_case,
    build_debtor_invoice_details_use_case,
    build_wip_analytics_use_case,
)
from wip_analytics.infrastructure.logging.logger import get_usage_logger
from wip_analytics.infrastructure.settings import AnalyticsSettings

CACHE_TTL_SECONDS = 600


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that the dataframe stack used by Altair imports cleanly.

    Returns:
        tuple[bool, str | None]: Whether charts can render, and an error
        message when they cannot.
    """
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Charts need numpy and pandas installed: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, (
            "numpy is installed but incomplete (missing ndarray). "
            "Reinstall numpy to render charts."
        )
    if not hasattr(pandas, "Timestamp"):
        return False, (
            "pandas is installed but incomplete (missing Timestamp). "
            "Reinstall pandas to render charts."
        )
    return True, None


def _build_scope(
    client_id: str,
    task_ids: tuple[str, ...],
) -> TransactionScope | None:
    """Return the scope selected in the sidebar, or None when empty."""
    client_id = client_id.strip()
    if client_id:
        return TransactionScope.for_client(client_id, task_ids)
    if len(task_ids) == 1:
        return TransactionScope.for_task(task_ids[0])
    if task_ids:
        return TransactionScope(task_ids=task_ids)
    return None


def _parse_ids(raw: str) -> tuple[str, ...]:
    """Split a comma-separated identifier list, dropping blanks."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _fetch_wip_analytics(
    client_id: str,
    task_ids: tuple[str, ...],
    resolution: str,
) -> WipAnalyticsView | None:
    """Fetch WIP analytics for the selected scope."""
    scope = _build_scope(client_id, task_ids)
    if scope is None:
        return None
    get_usage_logger().info(f"dashboard wip {scope.cache_token}")
    use_case = build_wip_analytics_use_case()
    return use_case.execute(scope, resolution=resolution)


@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def _load_wip_analytics(
    client_id: str,
    task_ids: tuple[str, ...],
    resolution: str,
    schema_version: int = 1,
) -> WipAnalyticsView | None:
    """Cached wrapper around _fetch_wip_analytics."""
    _ = schema_version
    return _fetch_wip_analytics(client_id, task_ids, resolution)


def _fetch_debtor_analytics(
    client_ids: tuple[str, ...],
) -> tuple[DebtorAnalyticsView, InvoiceDetailsReport]:
    """Fetch debtor metrics and open invoices for the clients."""
    get_usage_logger().info(f"dashboard debtors {','.join(client_ids)}")
    settings = AnalyticsSettings.from_env()
    analytics = build_debtor_analytics_use_case(settings=settings)
    details = build_debtor_invoice_details_use_case(settings=settings)
    return analytics.execute(client_ids), details.execute(client_ids)


@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def _load_debtor_analytics(
    client_ids: tuple[str, ...],
    schema_version: int = 1,
) -> tuple[DebtorAnalyticsView, InvoiceDetailsReport]:
    """Cached wrapper around _fetch_debtor_analytics."""
    _ = schema_version
    return _fetch_debtor_analytics(client_ids)


def _format_currency(value: Decimal, currency_code: str = "ZAR") -> str:
    """Format currency values for display."""
    symbol = "R" if currency_code == "ZAR" else currency_code
    return f"{symbol} {value:,.2f}"


def _format_days(value: Decimal | None) -> str:
    """Format an average day count, or a dash when not available."""
    if value is None:
        return "—"
    return f"{value:.0f} days"


def _prepare_wip_chart_data(
    series: WipSeries,
) -> list[dict[str, str | float]]:
    """Flatten a WIP series into Altair-ready records.

    Args:
        series: Downsampled WIP series.

    Returns:
        One record per point with the balance and the signed activity.
    """
    return [
        {
            "date": metric.date,
            "wip_balance": float(metric.wip_balance),
            "activity": float(metric.wip_change),
            "balance_label": _format_currency(metric.wip_balance),
        }
        for metric in series.daily_metrics
    ]


def _prepare_aging_chart_data(
    view: DebtorAnalyticsView,
    scheme: AgingScheme,
) -> list[dict[str, str | float]]:
    """Return one record per aging bucket, in scheme order."""
    labels = {bucket.key: bucket.label for bucket in scheme.buckets}
    return [
        {
            "bucket": labels.get(key, key),
            "order": index,
            "amount": float(amount),
            "amount_label": _format_currency(amount),
        }
        for index, (key, amount) in enumerate(view.overall.aging.amounts)
    ]


def _render_wip_chart(series: WipSeries, title: str) -> None:
    """Render the WIP balance line over daily activity bars."""
    if not series.daily_metrics:
        st.info("No WIP activity in the selected window.")
        return
    data = _prepare_wip_chart_data(series)
    base = alt.Chart(alt.Data(values=data)).encode(
        x=alt.X("date:T", title=None),
    )
    bars = base.mark_bar(opacity=0.35, color="#6c8ead").encode(
        y=alt.Y("activity:Q", title="Daily change"),
    )
    line = base.mark_line(color="#1b9aaa", strokeWidth=2).encode(
        y=alt.Y("wip_balance:Q", title="WIP balance"),
        tooltip=[
            alt.Tooltip("date:T"),
            alt.Tooltip("balance_label:N", title="Balance"),
        ],
    )
    chart = alt.layer(bars, line).resolve_scale(y="independent").properties(
        height=320,
    )
    st.subheader(title)
    st.altair_chart(chart, width="stretch")


def _render_aging_chart(
    view: DebtorAnalyticsView,
    scheme: AgingScheme,
) -> None:
    """Render aged debtor balances as a bar chart."""
    data = _prepare_aging_chart_data(view, scheme)
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
        color="#f4a261",
    ).encode(
        x=alt.X("bucket:N", sort=alt.SortField("order"), title=None),
        y=alt.Y("amount:Q", title="Balance"),
        tooltip=[
            alt.Tooltip("bucket:N"),
            alt.Tooltip("amount_label:N", title="Amount"),
        ],
    ).properties(height=300)
    st.subheader("Aged balances")
    st.altair_chart(chart, width="stretch")


def _render_invoice_table(report: InvoiceDetailsReport) -> None:
    """Render open invoices grouped by bucket."""
    st.subheader("Open invoices")
    st.caption(
        f"{report.invoice_count} invoices, "
        f"{_format_currency(report.total_outstanding)} outstanding"
    )
    data = [
        {
            "Bucket": report.bucket_labels[key],
            "Invoice": detail.invoice_number,
            "Date": detail.invoice_date.isoformat(),
            "Original": float(detail.original_amount),
            "Paid": float(detail.payments_received),
            "Balance": float(detail.net_balance),
            "Days": detail.days_outstanding,
            "Service line": detail.service_line or "—",
        }
        for key, invoices in report.buckets.items()
        for detail in invoices
    ]
    st.dataframe(data, width="stretch", hide_index=True, height=420)


def _render_wip_page(charts_ok: bool) -> None:
    client_id = st.sidebar.text_input("Client ID")
    task_ids = _parse_ids(st.sidebar.text_input("Task IDs (comma separated)"))
    resolution = st.sidebar.selectbox(
        "Resolution",
        list(RESOLUTION_TARGET_POINTS),
        index=list(RESOLUTION_TARGET_POINTS).index("standard"),
    )
    view = _load_wip_analytics(client_id, task_ids, resolution)
    if view is None:
        st.info("Enter a client or task to load WIP analytics.")
        return

    summary = view.overall.summary
    st.caption(
        f"{view.scope_label}: {view.start_date} to {view.end_date}, "
        f"{len(view.overall.daily_metrics)} points"
    )
    balance_col, production_col, billing_col, opening_col = st.columns(4)
    balance_col.metric(
        "WIP balance",
        _format_currency(summary.current_wip_balance),
    )
    production_col.metric(
        "Production",
        _format_currency(summary.total_production),
    )
    billing_col.metric("Billing", _format_currency(summary.total_billing))
    opening_col.metric(
        "Opening balance",
        _format_currency(summary.opening_balance),
    )
    if not charts_ok:
        return
    _render_wip_chart(view.overall, "WIP balance")
    for code, series in sorted(view.by_service_line.items()):
        _render_wip_chart(series, view.service_line_names.get(code, code))


def _render_debtors_page(charts_ok: bool) -> None:
    client_ids = _parse_ids(st.sidebar.text_input("Client IDs"))
    if not client_ids:
        st.info("Enter one or more clients to load debtor analytics.")
        return
    view, report = _load_debtor_analytics(client_ids)
    overall = view.overall

    balance_col, paid_col, outstanding_col = st.columns(3)
    balance_col.metric("Debtors", _format_currency(overall.total_balance))
    paid_col.metric(
        "Average days to pay",
        _format_days(overall.avg_payment_days_paid),
    )
    outstanding_col.metric(
        "Average days outstanding",
        _format_days(overall.avg_payment_days_outstanding),
    )
    if view.last_updated is not None:
        st.caption(f"Last updated {view.last_updated:%Y-%m-%d %H:%M}")
    if charts_ok:
        scheme = AnalyticsSettings.from_env().resolve_aging_scheme()
        _render_aging_chart(view, scheme)
    _render_invoice_table(report)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="WIP & Debtors", layout="wide")
    st.title("WIP & Debtors")

    charts_ok, message = _check_altair_dependencies()
    if not charts_ok:
        st.warning(message)

    page = st.sidebar.selectbox("Page", ["WIP", "Debtors"])
    if page == "WIP":
        _render_wip_page(charts_ok)
    else:
        _render_debtors_page(charts_ok)


if __name__ == "__main__":  # pragma: no cover
    main()
