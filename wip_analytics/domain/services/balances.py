"""Domain services for WIP balance aggregation."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from wip_analytics.domain.constants import (
    DISBURSEMENT_ADJUSTMENT_TOKENS,
    TIME_ADJUSTMENT_TOKENS,
)
from wip_analytics.domain.models import (
    DailyMetric,
    DailyTypeSumRow,
    TransactionCategory,
    TypeSumRow,
    WipBreakdown,
    WipSeries,
    WipSummary,
    WipTransaction,
)
from wip_analytics.domain.services.categorization import categorize_transaction
from wip_analytics.domain.services.normalization import normalize_code
from wip_analytics.utils.date_utils import day_key, to_day
from wip_analytics.utils.decimal_utils import coerce_decimal


@dataclass
class _CategoryTotals:
    production: Decimal = Decimal("0")
    adjustments: Decimal = Decimal("0")
    disbursements: Decimal = Decimal("0")
    billing: Decimal = Decimal("0")
    provisions: Decimal = Decimal("0")

    def add(self, category: TransactionCategory, amount: Decimal) -> None:
        if category.is_time:
            self.production += amount
        elif category.is_adjustment:
            self.adjustments += amount
        elif category.is_disbursement:
            self.disbursements += amount
        elif category.is_fee:
            self.billing += amount
        elif category.is_provision:
            self.provisions += amount

    @property
    def wip_change(self) -> Decimal:
        return (
            self.production
            + self.adjustments
            + self.disbursements
            + self.provisions
            - self.billing
        )


def aggregate_daily_metrics(
    transactions: Iterable[WipTransaction],
    opening_balance: Decimal = Decimal("0"),
) -> WipSeries:
    """Group transactions by day and compute the running WIP balance.

    Args:
        transactions: WIP rows of the reporting window, in any order.
        opening_balance: Balance carried into the window.

    Returns:
        WipSeries: Chronological daily metrics and window totals.
    """
    entries = (
        (
            txn.tran_date,
            categorize_transaction(txn.type_code, txn.sub_type_code),
            txn.amount,
        )
        for txn in transactions
    )
    return _build_series(entries, opening_balance)


def aggregate_daily_type_sums(
    rows: Iterable[DailyTypeSumRow],
    opening_balance: Decimal = Decimal("0"),
) -> WipSeries:
    """Build a WIP series from amounts already summed per day and type.

    Args:
        rows: Day/type sums produced by the data-access layer.
        opening_balance: Balance carried into the window.

    Returns:
        WipSeries: Chronological daily metrics and window totals.
    """
    entries = (
        (
            row.tran_date,
            categorize_transaction(row.type_code, row.sub_type_code),
            row.amount,
        )
        for row in rows
    )
    return _build_series(entries, opening_balance)


def compute_opening_balance(
    transactions: Iterable[WipTransaction],
    cutoff: date | None = None,
) -> Decimal:
    """Compute the WIP balance of rows dated strictly before ``cutoff``.

    Args:
        transactions: WIP rows; rows on or after ``cutoff`` are ignored.
        cutoff: First day of the reporting window, None to use every row.

    Returns:
        Decimal: Production + adjustments + disbursements + provisions
        minus billing.
    """
    totals = _CategoryTotals()
    for txn in transactions:
        if cutoff is not None and to_day(txn.tran_date) >= cutoff:
            continue
        totals.add(
            categorize_transaction(txn.type_code, txn.sub_type_code),
            coerce_decimal(txn.amount),
        )
    return totals.wip_change


def compute_opening_balance_from_type_sums(
    type_sums: Mapping[str | tuple[str, str | None], Decimal]
    | Iterable[TypeSumRow],
) -> Decimal:
    """Compute the WIP balance from amounts pre-summed per type code.

    Args:
        type_sums: Mapping of type code, or of ``(type_code, sub_type_code)``,
            to summed amount, or TypeSumRow items. A plain type code key
            carries no sub-type.

    Returns:
        Decimal: Same figure ``compute_opening_balance`` gives on the
        underlying rows.
    """
    if isinstance(type_sums, Mapping):
        entries = (
            (*_split_type_key(key), amount)
            for key, amount in type_sums.items()
        )
    else:
        entries = (
            (row.type_code, row.sub_type_code, row.amount) for row in type_sums
        )
    totals = _CategoryTotals()
    for type_code, sub_type_code, amount in entries:
        totals.add(
            categorize_transaction(type_code, sub_type_code),
            coerce_decimal(amount),
        )
    return totals.wip_change


def compute_wip_breakdown(
    transactions: Iterable[WipTransaction],
) -> WipBreakdown:
    """Split the lifetime WIP of a scope into its components.

    Adjustments are attributed to time or disbursements from their sub-type;
    adjustments naming neither count as time adjustments.

    Args:
        transactions: Every WIP row of the scope.

    Returns:
        WipBreakdown: Component totals with gross and net WIP.
    """
    time = Decimal("0")
    time_adjustments = Decimal("0")
    disbursements = Decimal("0")
    disbursement_adjustments = Decimal("0")
    fees = Decimal("0")
    provision = Decimal("0")
    count = 0
    for txn in transactions:
        count += 1
        amount = coerce_decimal(txn.amount)
        category = categorize_transaction(txn.type_code, txn.sub_type_code)
        if category.is_time:
            time += amount
        elif category.is_disbursement:
            disbursements += amount
        elif category.is_fee:
            fees += amount
        elif category.is_provision:
            provision += amount
        elif category.is_adjustment:
            if _is_disbursement_adjustment(txn.sub_type_code):
                disbursement_adjustments += amount
            else:
                time_adjustments += amount
    return WipBreakdown(
        time=time,
        time_adjustments=time_adjustments,
        disbursements=disbursements,
        disbursement_adjustments=disbursement_adjustments,
        fees=fees,
        provision=provision,
        transaction_count=count,
    )


def _split_type_key(
    key: str | tuple[str, str | None],
) -> tuple[str, str | None]:
    if isinstance(key, tuple):
        type_code, sub_type_code = key
        return type_code, sub_type_code
    return key, None


def _is_disbursement_adjustment(sub_type_code: str | None) -> bool:
    code = normalize_code(sub_type_code)
    if any(token in code for token in TIME_ADJUSTMENT_TOKENS):
        return False
    return any(token in code for token in DISBURSEMENT_ADJUSTMENT_TOKENS)


def _build_series(
    entries: Iterable[tuple],
    opening_balance: Decimal,
) -> WipSeries:
    opening = coerce_decimal(opening_balance)
    daily: dict[str, _CategoryTotals] = {}
    for tran_date, category, amount in entries:
        key = day_key(tran_date)
        totals = daily.get(key)
        if totals is None:
            totals = _CategoryTotals()
            daily[key] = totals
        totals.add(category, coerce_decimal(amount))

    grand = _CategoryTotals()
    running = opening
    metrics: list[DailyMetric] = []
    for key in sorted(daily):
        totals = daily[key]
        running += totals.wip_change
        grand.production += totals.production
        grand.adjustments += totals.adjustments
        grand.disbursements += totals.disbursements
        grand.billing += totals.billing
        grand.provisions += totals.provisions
        metrics.append(
            DailyMetric(
                date=key,
                production=totals.production,
                adjustments=totals.adjustments,
                disbursements=totals.disbursements,
                billing=totals.billing,
                provisions=totals.provisions,
                wip_balance=running,
            )
        )

    summary = WipSummary(
        total_production=grand.production,
        total_adjustments=grand.adjustments,
        total_disbursements=grand.disbursements,
        total_billing=grand.billing,
        total_provisions=grand.provisions,
        current_wip_balance=running,
        opening_balance=opening,
    )
    return WipSeries(daily_metrics=metrics, summary=summary)


__all__ = [
    "aggregate_daily_metrics",
    "aggregate_daily_type_sums",
    "compute_opening_balance",
    "compute_opening_balance_from_type_sums",
    "compute_wip_breakdown",
]
