"""Domain models package."""

from .aging import AgeBucket, AgingScheme
from .finance import (
    AgingBuckets,
    DailyMetric,
    DebtorMetrics,
    InvoiceDetail,
    PaymentMetrics,
    PaymentRecord,
    TransactionCategory,
    WipBreakdown,
    WipSeries,
    WipSummary,
)
from .ledger_rows import (
    DailyTypeSumRow,
    DebtorTransaction,
    TypeSumRow,
    WipTransaction,
)

__all__ = [
    "AgeBucket",
    "AgingScheme",
    "AgingBuckets",
    "DailyMetric",
    "DebtorMetrics",
    "InvoiceDetail",
    "PaymentMetrics",
    "PaymentRecord",
    "TransactionCategory",
    "WipBreakdown",
    "WipSeries",
    "WipSummary",
    "DailyTypeSumRow",
    "DebtorTransaction",
    "TypeSumRow",
    "WipTransaction",
]
