"""Tests for the WIP and debtor report CLI adapters."""

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

from wip_analytics.adapters import debtor_report_cli, wip_report_cli
from wip_analytics.application.use_cases import (
    DebtorAnalyticsView,
    InvoiceDetailsReport,
    WipAnalyticsView,
)
from wip_analytics.domain.models import (
    AgingBuckets,
    DebtorMetrics,
    InvoiceDetail,
    WipBreakdown,
    WipSeries,
    WipSummary,
)
from wip_analytics.infrastructure.settings import AnalyticsSettings


class _Logger:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def info(self, msg: str) -> None:
        self.messages.append(msg)

    def warning(self, msg: str) -> None:
        self.messages.append(msg)


def _series(balance: str) -> WipSeries:
    return WipSeries(
        daily_metrics=[],
        summary=WipSummary(
            total_production=Decimal("1000"),
            total_adjustments=Decimal("-50"),
            total_disbursements=Decimal("0"),
            total_billing=Decimal("200"),
            total_provisions=Decimal("0"),
            current_wip_balance=Decimal(balance),
            opening_balance=Decimal("0"),
        ),
    )


def _patch_common(monkeypatch, module, logger) -> None:
    monkeypatch.setattr(module, "get_app_logger", lambda: logger)
    monkeypatch.setattr(module, "get_usage_logger", lambda: logger)
    monkeypatch.setattr(module, "build_database_adapter", lambda: "db")
    monkeypatch.setattr(
        module.AnalyticsSettings,
        "from_env",
        classmethod(lambda cls: AnalyticsSettings()),
    )


def test_wip_report_requires_scope(monkeypatch, capsys) -> None:
    logger = _Logger()
    _patch_common(monkeypatch, wip_report_cli, logger)
    monkeypatch.delenv("REPORT_CLIENT_ID", raising=False)
    monkeypatch.delenv("REPORT_TASK_IDS", raising=False)

    wip_report_cli.main()

    assert "required" in logger.messages[0]
    assert capsys.readouterr().out == ""


def test_wip_report_prints_summary(monkeypatch, capsys) -> None:
    """The CLI should run both use cases and print their results."""
    logger = _Logger()
    _patch_common(monkeypatch, wip_report_cli, logger)
    monkeypatch.setenv("REPORT_CLIENT_ID", "C1")
    monkeypatch.setenv("REPORT_TASK_IDS", "T1, T2,")
    monkeypatch.setenv("REPORT_RESOLUTION", "high")
    monkeypatch.setenv("REPORT_START_DATE", "2024-01-01")
    monkeypatch.setenv("REPORT_END_DATE", "not-a-date")

    analytics = MagicMock()
    analytics.execute.return_value = WipAnalyticsView(
        scope_label="client:C1",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 6, 30),
        resolution="high",
        target_points=365,
        overall=_series("750"),
        by_service_line={"TAX": _series("750")},
        service_line_names={"TAX": "Tax"},
    )
    balances = MagicMock()
    balances.execute.return_value = WipBreakdown(
        time=Decimal("1000"),
        time_adjustments=Decimal("-50"),
        disbursements=Decimal("0"),
        disbursement_adjustments=Decimal("0"),
        fees=Decimal("200"),
        provision=Decimal("-10"),
    )
    monkeypatch.setattr(
        wip_report_cli,
        "build_wip_analytics_use_case",
        lambda db, settings=None: analytics,
    )
    monkeypatch.setattr(
        wip_report_cli,
        "build_wip_balances_use_case",
        lambda db: balances,
    )

    wip_report_cli.main()

    scope = analytics.execute.call_args.args[0]
    assert scope.client_ids == ("C1",)
    assert scope.task_ids == ("T1", "T2")
    assert analytics.execute.call_args.kwargs == {
        "start_date": date(2024, 1, 1),
        "end_date": None,
        "resolution": "high",
    }
    output = capsys.readouterr().out
    assert "WIP report for client:C1" in output
    assert "current=750" in output
    assert "Tax: 750" in output
    assert "gross=750, net=740" in output
    assert any("Invalid date" in message for message in logger.messages)


def test_debtor_report_prints_metrics(monkeypatch, capsys) -> None:
    logger = _Logger()
    _patch_common(monkeypatch, debtor_report_cli, logger)
    monkeypatch.setenv("REPORT_CLIENT_ID", "C1")
    monkeypatch.setenv("REPORT_AS_OF", "2024-06-30")

    aging = AgingBuckets(
        scheme_name="aging_60",
        amounts=(("current", Decimal("400")), ("days61_90", Decimal("0"))),
    )
    analytics = MagicMock()
    analytics.execute.return_value = DebtorAnalyticsView(
        overall=DebtorMetrics(
            total_balance=Decimal("400"),
            aging=aging,
            avg_payment_days_paid=None,
            avg_payment_days_outstanding=Decimal("20"),
            transaction_count=1,
            invoice_count=1,
        ),
        by_service_line={},
        service_line_names={},
        transaction_count=1,
        last_updated=datetime(2024, 6, 1),
    )
    detail = InvoiceDetail(
        invoice_number="INV2",
        invoice_date=date(2024, 6, 10),
        original_amount=Decimal("400"),
        payments_received=Decimal("0"),
        net_balance=Decimal("400"),
        days_outstanding=20,
    )
    details = MagicMock()
    details.execute.return_value = InvoiceDetailsReport(
        scheme_name="aging_30",
        buckets={"current": [detail], "days31_60": []},
        bucket_labels={"current": "0-30 days", "days31_60": "31-60 days"},
    )
    monkeypatch.setattr(
        debtor_report_cli,
        "build_debtor_analytics_use_case",
        lambda db, settings=None: analytics,
    )
    monkeypatch.setattr(
        debtor_report_cli,
        "build_debtor_invoice_details_use_case",
        lambda db, settings=None: details,
    )

    debtor_report_cli.main()

    analytics.execute.assert_called_once_with(("C1",), today=date(2024, 6, 30))
    output = capsys.readouterr().out
    assert "balance=400" in output
    assert "current=400, days61_90=0" in output
    assert "Average days to pay=n/a" in output
    assert "average days outstanding=20.0" in output
    assert "Open invoices=1, outstanding=400" in output
    assert "0-30 days: 1" in output
    assert "31-60 days" not in output
