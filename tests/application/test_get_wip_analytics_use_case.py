"""Tests for the GetWipAnalyticsUseCase."""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

from wip_analytics.application.ports.transaction_scope import TransactionScope
from wip_analytics.application.use_cases.get_wip_analytics import (
    GetWipAnalyticsUseCase,
)
from wip_analytics.domain.constants import UNKNOWN_SERVICE_LINE
from wip_analytics.domain.models import (
    DailyTypeSumRow,
    TypeSumRow,
    WipTransaction,
)
from wip_analytics.infrastructure.cache import InMemoryResultCache


class _FakeWipRepository:
    def __init__(self, rows: list[WipTransaction]) -> None:
        self._rows = rows
        self.calls: list[str] = []

    def fetch_transactions(self, scope, start_date, end_date):
        self.calls.append("fetch_transactions")
        return [r for r in self._rows if start_date <= r.tran_date <= end_date]

    def fetch_transactions_before(self, scope, cutoff):
        self.calls.append("fetch_transactions_before")
        return [r for r in self._rows if r.tran_date < cutoff]

    def fetch_type_sums_before(self, scope, cutoff):
        self.calls.append("fetch_type_sums_before")
        sums: dict[tuple, Decimal] = {}
        for row in self._rows:
            if row.tran_date < cutoff:
                key = (row.type_code, row.sub_type_code)
                sums[key] = sums.get(key, 0) + row.amount
        return [
            TypeSumRow(code, amount, sub_type)
            for (code, sub_type), amount in sums.items()
        ]

    def fetch_daily_type_sums(self, scope, start_date, end_date):
        self.calls.append("fetch_daily_type_sums")
        sums: dict[tuple, Decimal] = {}
        for row in self._rows:
            if start_date <= row.tran_date <= end_date:
                key = (row.tran_date, row.type_code, row.sub_type_code or "")
                sums[key] = sums.get(key, 0) + row.amount
        return [
            DailyTypeSumRow(day, code, amount, sub_type or None)
            for (day, code, sub_type), amount in sorted(sums.items())
        ]

    def fetch_all_transactions(self, scope):
        return list(self._rows)


class _FakeServiceLineRepository:
    def fetch_service_line_mappings(self):
        return {"TAXC": "TAX", "AUD1": "AUDIT"}

    def fetch_master_service_line_names(self):
        return {"TAX": "Tax", "AUDIT": "Audit"}


def _rows() -> list[WipTransaction]:
    return [
        WipTransaction(date(2023, 12, 1), Decimal("500"), "T", service_line="TAXC"),
        WipTransaction(date(2023, 12, 2), Decimal("100"), "F", service_line="TAXC"),
        WipTransaction(date(2023, 12, 3), Decimal("70"), "T", service_line="AUD1"),
        WipTransaction(date(2024, 1, 5), Decimal("1000"), "T", service_line="TAXC"),
        WipTransaction(date(2024, 1, 6), Decimal("200"), "F", service_line="TAXC"),
        WipTransaction(date(2024, 1, 7), Decimal("30"), "D", service_line="AUD1"),
        WipTransaction(date(2024, 1, 8), Decimal("9"), "T"),
    ]


def test_execute_splits_by_service_line() -> None:
    """Each service line gets its own opening balance and series."""
    repository = _FakeWipRepository(_rows())
    use_case = GetWipAnalyticsUseCase(
        repository,
        service_line_repository=_FakeServiceLineRepository(),
        logger=MagicMock(),
    )

    view = use_case.execute(
        TransactionScope.for_client("C1"),
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )

    assert view.target_points == 120
    assert view.overall.summary.opening_balance == Decimal("470")
    assert view.overall.summary.current_wip_balance == Decimal("1309")
    tax = view.by_service_line["TAX"].summary
    assert tax.opening_balance == Decimal("400")
    assert tax.current_wip_balance == Decimal("1200")
    audit = view.by_service_line["AUDIT"].summary
    assert audit.opening_balance == Decimal("70")
    assert audit.current_wip_balance == Decimal("100")
    assert view.by_service_line[UNKNOWN_SERVICE_LINE].summary.current_wip_balance == (
        Decimal("9")
    )
    assert view.service_line_names == {"TAX": "Tax", "AUDIT": "Audit"}
    assert "fetch_type_sums_before" not in repository.calls


def test_execute_overall_uses_type_sums() -> None:
    """Without the split the source-side sums give the same balances."""
    repository = _FakeWipRepository(_rows())
    use_case = GetWipAnalyticsUseCase(repository, logger=MagicMock())

    view = use_case.execute(
        TransactionScope.for_client("C1"),
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
        resolution="low",
    )

    assert repository.calls == ["fetch_type_sums_before", "fetch_daily_type_sums"]
    assert view.resolution == "low"
    assert view.target_points == 60
    assert view.overall.summary.opening_balance == Decimal("470")
    assert view.overall.summary.current_wip_balance == Decimal("1309")
    assert view.by_service_line == {}


def test_split_and_overall_modes_agree_on_fee_sub_types() -> None:
    """Billing filed under a generic type counts the same in both modes."""
    rows = [
        WipTransaction(date(2023, 5, 1), Decimal("1000"), "T", service_line="TAXC"),
        WipTransaction(
            date(2023, 6, 1),
            Decimal("300"),
            "X",
            sub_type_code="FEE_BILLED",
            service_line="TAXC",
        ),
        WipTransaction(date(2024, 2, 1), Decimal("100"), "T", service_line="TAXC"),
        WipTransaction(
            date(2024, 2, 2),
            Decimal("50"),
            "X",
            sub_type_code="BILLING",
            service_line="TAXC",
        ),
    ]
    use_case = GetWipAnalyticsUseCase(
        _FakeWipRepository(rows),
        service_line_repository=_FakeServiceLineRepository(),
        logger=MagicMock(),
    )
    scope = TransactionScope.for_client("C1")

    split = use_case.execute(
        scope,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 1),
    )
    overall = use_case.execute(
        scope,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 1),
        by_service_line=False,
    )

    assert split.overall.summary.opening_balance == Decimal("700")
    assert overall.overall.summary.opening_balance == Decimal("700")
    assert split.overall.summary.current_wip_balance == Decimal("750")
    assert overall.overall.summary.current_wip_balance == Decimal("750")
    assert overall.overall.summary.total_billing == Decimal("50")


def test_execute_defaults_window_to_lookback() -> None:
    repository = _FakeWipRepository([])
    use_case = GetWipAnalyticsUseCase(
        repository,
        logger=MagicMock(),
        lookback_months=24,
    )

    view = use_case.execute(
        TransactionScope.for_task("T1"),
        today=date(2024, 6, 15),
        resolution="unknown",
    )

    assert view.start_date == date(2022, 6, 15)
    assert view.end_date == date(2024, 6, 15)
    assert view.resolution == "standard"
    assert view.overall.daily_metrics == []


def test_execute_downsamples_long_series() -> None:
    start = date(2023, 1, 1)
    rows = [
        WipTransaction(start + timedelta(days=offset), Decimal("1"), "T")
        for offset in range(0, 400, 2)
    ]
    repository = _FakeWipRepository(rows)
    use_case = GetWipAnalyticsUseCase(repository, logger=MagicMock())

    view = use_case.execute(
        TransactionScope.for_client("C1"),
        start_date=start,
        end_date=start + timedelta(days=400),
        resolution="low",
    )

    # Every day in the series has activity, so nothing is dropped.
    assert len(view.overall.daily_metrics) == 200
    assert view.overall.summary.current_wip_balance == Decimal("200")


def test_execute_returns_cached_view() -> None:
    repository = _FakeWipRepository(_rows())
    cache = InMemoryResultCache()
    logger = MagicMock()
    use_case = GetWipAnalyticsUseCase(repository, cache=cache, logger=logger)
    scope = TransactionScope.for_client("C1")

    first = use_case.execute(
        scope,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )
    calls_after_first = list(repository.calls)
    second = use_case.execute(
        scope,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )

    assert second is first
    assert repository.calls == calls_after_first
    assert len(cache) == 1
    logged = [call.args[0] for call in logger.info.call_args_list]
    assert any("cache hit" in message for message in logged)
