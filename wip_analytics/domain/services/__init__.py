"""Domain services package."""

from .balances import (
    aggregate_daily_metrics,
    aggregate_daily_type_sums,
    compute_opening_balance,
    compute_opening_balance_from_type_sums,
    compute_wip_breakdown,
)
from .categorization import categorize_transaction, is_fee_sub_type
from .debtors import (
    aggregate_debtors_by_service_line,
    build_invoice_details,
    compute_aging,
    compute_debtor_metrics,
    compute_payment_metrics,
    get_aging_scheme,
    group_invoices_by_bucket,
    is_invoice_entry,
    is_payment_entry,
)
from .downsampling import InvalidTargetPointsError, downsample_daily_metrics
from .normalization import (
    normalize_code,
    normalize_entry_type,
    normalize_service_line,
)
from .service_lines import (
    partition_by_service_line,
    resolve_master_service_line,
)

__all__ = [
    "aggregate_daily_metrics",
    "aggregate_daily_type_sums",
    "compute_opening_balance",
    "compute_opening_balance_from_type_sums",
    "compute_wip_breakdown",
    "categorize_transaction",
    "is_fee_sub_type",
    "aggregate_debtors_by_service_line",
    "build_invoice_details",
    "compute_aging",
    "compute_debtor_metrics",
    "compute_payment_metrics",
    "get_aging_scheme",
    "group_invoices_by_bucket",
    "is_invoice_entry",
    "is_payment_entry",
    "InvalidTargetPointsError",
    "downsample_daily_metrics",
    "normalize_code",
    "normalize_entry_type",
    "normalize_service_line",
    "partition_by_service_line",
    "resolve_master_service_line",
]
