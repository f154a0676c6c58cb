"""Domain models for financial aggregates."""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class TransactionCategory:
    """Category flags for a WIP transaction.

    At most one flag is set; a row with no flag set is unknown.
    """

    is_time: bool = False
    is_adjustment: bool = False
    is_disbursement: bool = False
    is_fee: bool = False
    is_provision: bool = False

    @property
    def is_unknown(self) -> bool:
        """Return True when no category matched."""
        return not (
            self.is_time
            or self.is_adjustment
            or self.is_disbursement
            or self.is_fee
            or self.is_provision
        )


@dataclass(frozen=True)
class DailyMetric:
    """WIP movements for a single calendar day.

    Attributes:
        date: ISO day key (``YYYY-MM-DD``).
        production: Time recorded on the day.
        adjustments: Write-ups and write-downs.
        disbursements: Out-of-pocket costs.
        billing: Fees billed (positive magnitude).
        provisions: Provisions raised.
        wip_balance: Cumulative balance including this day.
    """

    date: str
    production: Decimal = Decimal("0")
    adjustments: Decimal = Decimal("0")
    disbursements: Decimal = Decimal("0")
    billing: Decimal = Decimal("0")
    provisions: Decimal = Decimal("0")
    wip_balance: Decimal = Decimal("0")

    @property
    def has_activity(self) -> bool:
        """Return True when any category total is non-zero."""
        return (
            self.production != 0
            or self.adjustments != 0
            or self.disbursements != 0
            or self.billing != 0
            or self.provisions != 0
        )

    @property
    def wip_change(self) -> Decimal:
        """Return the net WIP movement of the day."""
        return (
            self.production
            + self.adjustments
            + self.disbursements
            + self.provisions
            - self.billing
        )

    def with_balance(self, wip_balance: Decimal) -> "DailyMetric":
        """Return a copy carrying the given cumulative balance."""
        return replace(self, wip_balance=wip_balance)


@dataclass(frozen=True)
class WipSummary:
    """Grand totals of a WIP series.

    Attributes:
        total_production: Sum of production.
        total_adjustments: Sum of adjustments.
        total_disbursements: Sum of disbursements.
        total_billing: Sum of billing.
        total_provisions: Sum of provisions.
        current_wip_balance: Balance after the last day of the window.
        opening_balance: Balance carried into the window.
    """

    total_production: Decimal
    total_adjustments: Decimal
    total_disbursements: Decimal
    total_billing: Decimal
    total_provisions: Decimal
    current_wip_balance: Decimal
    opening_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class WipSeries:
    """Daily metrics and summary for one scope."""

    daily_metrics: list[DailyMetric]
    summary: WipSummary


@dataclass(frozen=True)
class WipBreakdown:
    """Lifetime WIP balance split into its components."""

    time: Decimal
    time_adjustments: Decimal
    disbursements: Decimal
    disbursement_adjustments: Decimal
    fees: Decimal
    provision: Decimal
    transaction_count: int = 0

    @property
    def gross_wip(self) -> Decimal:
        """Return WIP before provisions."""
        return (
            self.time
            + self.time_adjustments
            + self.disbursements
            + self.disbursement_adjustments
            - self.fees
        )

    @property
    def net_wip(self) -> Decimal:
        """Return WIP after provisions."""
        return self.gross_wip + self.provision


@dataclass(frozen=True)
class AgingBuckets:
    """Debtor amounts split into the buckets of an aging scheme."""

    scheme_name: str
    amounts: tuple[tuple[str, Decimal], ...]

    @property
    def total(self) -> Decimal:
        """Return the sum of all buckets."""
        return sum((amount for _, amount in self.amounts), Decimal("0"))

    def amount_for(self, key: str) -> Decimal:
        """Return the amount of a bucket.

        Raises:
            KeyError: If the scheme has no bucket with that key.
        """
        for bucket_key, amount in self.amounts:
            if bucket_key == key:
                return amount
        raise KeyError(key)

    def as_dict(self) -> dict[str, Decimal]:
        """Return the buckets as an ordered mapping."""
        return dict(self.amounts)


@dataclass(frozen=True)
class PaymentMetrics:
    """Weighted payment-speed averages for a set of invoices."""

    avg_payment_days_paid: Decimal | None
    avg_payment_days_outstanding: Decimal


@dataclass(frozen=True)
class DebtorMetrics:
    """Debtor balance, aging and payment-speed figures."""

    total_balance: Decimal
    aging: AgingBuckets
    avg_payment_days_paid: Decimal | None
    avg_payment_days_outstanding: Decimal
    transaction_count: int
    invoice_count: int


@dataclass(frozen=True)
class PaymentRecord:
    """Payment applied to an invoice."""

    tran_date: date
    amount: Decimal
    reference: str | None = None


@dataclass(frozen=True)
class InvoiceDetail:
    """Outstanding position of a single invoice."""

    invoice_number: str
    invoice_date: date
    original_amount: Decimal
    payments_received: Decimal
    net_balance: Decimal
    days_outstanding: int
    service_line: str | None = None
    payments: list[PaymentRecord] = field(default_factory=list)


__all__ = [
    "TransactionCategory",
    "DailyMetric",
    "WipSummary",
    "WipSeries",
    "WipBreakdown",
    "AgingBuckets",
    "PaymentMetrics",
    "DebtorMetrics",
    "PaymentRecord",
    "InvoiceDetail",
]
