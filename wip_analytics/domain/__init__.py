"""Domain package for business rules and core models."""

from .constants import (
    AGING_SCHEME_30,
    AGING_SCHEME_60,
    DEFAULT_RESOLUTION,
    RESOLUTION_TARGET_POINTS,
    UNKNOWN_SERVICE_LINE,
)
from .models import (
    AgingBuckets,
    DailyMetric,
    DebtorMetrics,
    DebtorTransaction,
    InvoiceDetail,
    TransactionCategory,
    TypeSumRow,
    WipBreakdown,
    WipSeries,
    WipSummary,
    WipTransaction,
)
from .policies import resolve_target_points
from .services import (
    aggregate_daily_metrics,
    categorize_transaction,
    compute_aging,
    compute_debtor_metrics,
    compute_opening_balance,
    compute_opening_balance_from_type_sums,
    compute_payment_metrics,
    downsample_daily_metrics,
)

__all__ = [
    "AGING_SCHEME_30",
    "AGING_SCHEME_60",
    "DEFAULT_RESOLUTION",
    "RESOLUTION_TARGET_POINTS",
    "UNKNOWN_SERVICE_LINE",
    "AgingBuckets",
    "DailyMetric",
    "DebtorMetrics",
    "DebtorTransaction",
    "InvoiceDetail",
    "TransactionCategory",
    "TypeSumRow",
    "WipBreakdown",
    "WipSeries",
    "WipSummary",
    "WipTransaction",
    "resolve_target_points",
    "aggregate_daily_metrics",
    "categorize_transaction",
    "compute_aging",
    "compute_debtor_metrics",
    "compute_opening_balance",
    "compute_opening_balance_from_type_sums",
    "compute_payment_metrics",
    "downsample_daily_metrics",
]
