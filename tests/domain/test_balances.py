"""Tests for daily WIP aggregation and opening balances."""

from datetime import date, datetime
from decimal import Decimal

from wip_analytics.domain.models import (
    DailyTypeSumRow,
    TypeSumRow,
    WipTransaction,
)
from wip_analytics.domain.services import (
    aggregate_daily_metrics,
    aggregate_daily_type_sums,
    compute_opening_balance,
    compute_opening_balance_from_type_sums,
    compute_wip_breakdown,
)


def _txn(day, amount, type_code, sub_type_code=None, service_line=None):
    return WipTransaction(
        tran_date=day,
        amount=Decimal(str(amount)),
        type_code=type_code,
        sub_type_code=sub_type_code,
        service_line=service_line,
    )


def test_aggregate_daily_metrics_running_balance():
    """Time minus fees, then an adjustment, gives 800 then 750."""
    rows = [
        _txn(date(2024, 1, 1), 1000, "TIME"),
        _txn(date(2024, 1, 1), 200, "FEE"),
        _txn(date(2024, 1, 2), -50, "ADJ"),
    ]

    series = aggregate_daily_metrics(rows)

    assert [m.date for m in series.daily_metrics] == ["2024-01-01", "2024-01-02"]
    first, second = series.daily_metrics
    assert first.production == Decimal("1000")
    assert first.billing == Decimal("200")
    assert first.wip_balance == Decimal("800")
    assert second.adjustments == Decimal("-50")
    assert second.wip_balance == Decimal("750")
    assert series.summary.current_wip_balance == Decimal("750")
    assert series.summary.total_production == Decimal("1000")
    assert series.summary.total_billing == Decimal("200")


def test_aggregate_daily_metrics_ignores_input_order():
    rows = [
        _txn(date(2024, 3, 5), 10, "D"),
        _txn(date(2024, 3, 1), 100, "T"),
        _txn(date(2024, 3, 3), 30, "F"),
        _txn(date(2024, 3, 1), 5, "P"),
    ]

    forward = aggregate_daily_metrics(rows, Decimal("20"))
    backward = aggregate_daily_metrics(list(reversed(rows)), Decimal("20"))

    assert forward == backward
    assert [m.wip_balance for m in forward.daily_metrics] == [
        Decimal("125"),
        Decimal("95"),
        Decimal("105"),
    ]
    assert forward.summary.opening_balance == Decimal("20")


def test_aggregate_daily_metrics_empty_input_keeps_opening_balance():
    series = aggregate_daily_metrics([], Decimal("42.50"))

    assert series.daily_metrics == []
    assert series.summary.current_wip_balance == Decimal("42.50")
    assert series.summary.total_production == Decimal("0")


def test_unknown_rows_keep_day_but_do_not_move_balance():
    rows = [
        _txn(date(2024, 1, 1), 100, "T"),
        _txn(date(2024, 1, 2), 999, "MISC"),
    ]

    series = aggregate_daily_metrics(rows)

    assert len(series.daily_metrics) == 2
    assert series.daily_metrics[1].has_activity is False
    assert series.daily_metrics[1].wip_balance == Decimal("100")


def test_timestamps_are_grouped_by_calendar_day():
    rows = [
        _txn(datetime(2024, 1, 1, 8, 30), 10, "T"),
        _txn(datetime(2024, 1, 1, 17, 0), 15, "T"),
    ]

    series = aggregate_daily_metrics(rows)

    assert len(series.daily_metrics) == 1
    assert series.daily_metrics[0].production == Decimal("25")


def test_opening_balance_uses_rows_before_cutoff_only():
    rows = [
        _txn(date(2023, 12, 30), 500, "T"),
        _txn(date(2023, 12, 31), 100, "F"),
        _txn(date(2024, 1, 1), 1000, "T"),
    ]

    assert compute_opening_balance(rows, date(2024, 1, 1)) == Decimal("400")
    assert compute_opening_balance(rows) == Decimal("1400")


def test_opening_balance_matches_type_sum_path():
    rows = [
        _txn(date(2023, 6, 1), 700, "T"),
        _txn(date(2023, 6, 2), 300, "TI"),
        _txn(date(2023, 6, 3), -80, "ADJ"),
        _txn(date(2023, 6, 4), 45, "D"),
        _txn(date(2023, 6, 5), 400, "F"),
        _txn(date(2023, 6, 6), -60, "P"),
        _txn(date(2023, 6, 7), 12, "OTHER"),
        _txn(date(2023, 6, 8), 150, "X", "FEE_BILLED"),
        _txn(date(2023, 6, 9), 30, "X", "INTERIM BILLING"),
        _txn(date(2023, 6, 9), 8, "X", "MEMO"),
    ]
    sums: dict[tuple[str, str | None], Decimal] = {}
    for row in rows:
        key = (row.type_code, row.sub_type_code)
        sums[key] = sums.get(key, Decimal("0")) + row.amount

    raw = compute_opening_balance(rows)

    assert compute_opening_balance_from_type_sums(sums) == raw
    assert compute_opening_balance_from_type_sums(
        [TypeSumRow(code, amount, sub) for (code, sub), amount in sums.items()]
    ) == raw
    assert raw == Decimal("325")


def test_type_sum_mapping_with_plain_keys_has_no_sub_type():
    sums = {"T": Decimal("500"), "F": Decimal("200"), "X": Decimal("90")}

    assert compute_opening_balance_from_type_sums(sums) == Decimal("300")
    assert compute_opening_balance_from_type_sums(
        {**sums, ("X", "FEE_BILLED"): Decimal("100")}
    ) == Decimal("200")


def test_daily_type_sums_match_raw_aggregation():
    rows = [
        _txn(date(2024, 2, 1), 100, "T"),
        _txn(date(2024, 2, 1), 50, "T"),
        _txn(date(2024, 2, 1), 40, "F"),
        _txn(date(2024, 2, 2), 25, "X", "FEE_BILLED"),
        _txn(date(2024, 2, 2), 5, "X", "FEE_BILLED"),
        _txn(date(2024, 2, 3), 10, "D"),
    ]
    daily_sums = [
        DailyTypeSumRow(date(2024, 2, 1), "T", Decimal("150")),
        DailyTypeSumRow(date(2024, 2, 1), "F", Decimal("40")),
        DailyTypeSumRow(date(2024, 2, 2), "X", Decimal("30"), "FEE_BILLED"),
        DailyTypeSumRow(date(2024, 2, 3), "D", Decimal("10")),
    ]

    assert aggregate_daily_type_sums(daily_sums, Decimal("5")) == (
        aggregate_daily_metrics(rows, Decimal("5"))
    )


def test_compute_wip_breakdown_splits_adjustments():
    rows = [
        _txn(date(2024, 1, 1), 1000, "T"),
        _txn(date(2024, 1, 2), -100, "ADJ", "TIME WRITE-OFF"),
        _txn(date(2024, 1, 2), -20, "ADJ", "DISB ADJ"),
        _txn(date(2024, 1, 2), -5, "ADJ"),
        _txn(date(2024, 1, 3), 80, "D"),
        _txn(date(2024, 1, 4), 600, "F"),
        _txn(date(2024, 1, 5), -50, "P"),
    ]

    breakdown = compute_wip_breakdown(rows)

    assert breakdown.time == Decimal("1000")
    assert breakdown.time_adjustments == Decimal("-105")
    assert breakdown.disbursement_adjustments == Decimal("-20")
    assert breakdown.disbursements == Decimal("80")
    assert breakdown.fees == Decimal("600")
    assert breakdown.provision == Decimal("-50")
    assert breakdown.gross_wip == Decimal("355")
    assert breakdown.net_wip == Decimal("305")
    assert breakdown.net_wip == compute_opening_balance(rows)
    assert breakdown.transaction_count == 7
