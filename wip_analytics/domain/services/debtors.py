"""Domain services for debtor aging and payment-speed analytics."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from wip_analytics.domain.constants import (
    AGING_SCHEME_30,
    AGING_SCHEME_60,
    AGING_SCHEMES,
    INVOICE_ENTRY_TOKENS,
    PAYMENT_ENTRY_TOKENS,
)
from wip_analytics.domain.models import (
    AgingBuckets,
    AgingScheme,
    DebtorMetrics,
    DebtorTransaction,
    InvoiceDetail,
    PaymentMetrics,
    PaymentRecord,
)
from wip_analytics.domain.services.normalization import (
    normalize_entry_type,
    normalize_service_line,
)
from wip_analytics.domain.services.service_lines import (
    partition_by_service_line,
)
from wip_analytics.utils.date_utils import days_between, to_day
from wip_analytics.utils.decimal_utils import coerce_decimal, sum_decimals


def get_aging_scheme(name: str) -> AgingScheme:
    """Return a registered aging scheme by name.

    Args:
        name: Scheme name (``aging_60`` or ``aging_30``).

    Returns:
        AgingScheme: The matching scheme.

    Raises:
        ValueError: If no scheme is registered under that name.
    """
    scheme = AGING_SCHEMES.get(name.strip().lower())
    if scheme is None:
        available = ", ".join(sorted(AGING_SCHEMES))
        raise ValueError(
            f"Unknown aging scheme '{name}'. Expected one of: {available}"
        )
    return scheme


def is_invoice_entry(entry_type: str | None) -> bool:
    """Return True when an entry type denotes an invoice."""
    text = normalize_entry_type(entry_type)
    return any(token in text for token in INVOICE_ENTRY_TOKENS)


def is_payment_entry(entry_type: str | None) -> bool:
    """Return True when an entry type denotes a payment or receipt.

    Entry types matching an invoice token are never payments.
    """
    if is_invoice_entry(entry_type):
        return False
    text = normalize_entry_type(entry_type)
    return any(token in text for token in PAYMENT_ENTRY_TOKENS)


def compute_aging(
    transactions: Iterable[DebtorTransaction],
    today: date,
    scheme: AgingScheme = AGING_SCHEME_60,
) -> AgingBuckets:
    """Spread signed debtor amounts over the buckets of a scheme.

    Each row lands in exactly one bucket chosen from its age in whole days;
    rows dated after ``today`` count as current.

    Args:
        transactions: Debtor rows.
        today: Reference date for ages.
        scheme: Aging scheme to apply.

    Returns:
        AgingBuckets: Bucket totals summing to the total amount.
    """
    totals = {key: Decimal("0") for key in scheme.keys}
    for txn in transactions:
        age = days_between(txn.tran_date, today)
        bucket = scheme.classify(age)
        totals[bucket.key] += coerce_decimal(txn.amount)
    return AgingBuckets(
        scheme_name=scheme.name,
        amounts=tuple((key, totals[key]) for key in scheme.keys),
    )


@dataclass
class _InvoiceGroup:
    invoice_date: date | None = None
    invoice_amount: Decimal = Decimal("0")
    payment_date: date | None = None
    rows: list[DebtorTransaction] = field(default_factory=list)


def _group_invoices(
    transactions: Iterable[DebtorTransaction],
) -> dict[str, _InvoiceGroup]:
    groups: dict[str, _InvoiceGroup] = {}
    for txn in transactions:
        invoice_number = (txn.invoice_number or "").strip()
        if not invoice_number:
            continue
        groups.setdefault(invoice_number, _InvoiceGroup()).rows.append(txn)

    for group in groups.values():
        group.rows.sort(key=lambda row: to_day(row.tran_date))
        for row in group.rows:
            if group.invoice_date is None and is_invoice_entry(row.entry_type):
                group.invoice_date = to_day(row.tran_date)
                group.invoice_amount = coerce_decimal(row.amount)
        if group.invoice_date is None:
            continue
        for row in group.rows:
            if (
                is_payment_entry(row.entry_type)
                and to_day(row.tran_date) >= group.invoice_date
            ):
                group.payment_date = to_day(row.tran_date)
                break
    return groups


def compute_payment_metrics(
    transactions: Iterable[DebtorTransaction],
    today: date,
) -> PaymentMetrics:
    """Compute amount-weighted days-to-pay and days-outstanding.

    Rows are matched per invoice number: the earliest invoice row dates the
    invoice and the earliest payment row on or after it settles it. Partial
    payments are not modelled.

    Args:
        transactions: Debtor rows.
        today: Reference date for outstanding invoices.

    Returns:
        PaymentMetrics: ``avg_payment_days_paid`` is None without any paid
        invoice; ``avg_payment_days_outstanding`` is 0 without any
        outstanding invoice.
    """
    paid_weighted_days = Decimal("0")
    paid_amount = Decimal("0")
    outstanding_weighted_days = Decimal("0")
    outstanding_amount = Decimal("0")

    for group in _group_invoices(transactions).values():
        if group.invoice_date is None:
            continue
        weight = abs(group.invoice_amount)
        if group.payment_date is not None:
            days = days_between(group.invoice_date, group.payment_date)
            paid_weighted_days += days * weight
            paid_amount += weight
        else:
            days = days_between(group.invoice_date, today)
            outstanding_weighted_days += days * weight
            outstanding_amount += weight

    avg_paid = paid_weighted_days / paid_amount if paid_amount > 0 else None
    avg_outstanding = (
        outstanding_weighted_days / outstanding_amount
        if outstanding_amount > 0
        else Decimal("0")
    )
    return PaymentMetrics(
        avg_payment_days_paid=avg_paid,
        avg_payment_days_outstanding=avg_outstanding,
    )


def compute_debtor_metrics(
    transactions: Sequence[DebtorTransaction],
    today: date,
    scheme: AgingScheme = AGING_SCHEME_60,
) -> DebtorMetrics:
    """Compute balance, aging and payment-speed figures for a row set.

    Args:
        transactions: Debtor rows.
        today: Reference date for aging.
        scheme: Aging scheme to apply.

    Returns:
        DebtorMetrics: Aggregated figures; ``invoice_count`` counts invoice
        rows, not distinct invoice numbers.
    """
    rows = list(transactions)
    total_balance = sum_decimals(txn.amount for txn in rows)
    invoice_count = sum(1 for txn in rows if is_invoice_entry(txn.entry_type))
    payment = compute_payment_metrics(rows, today)
    return DebtorMetrics(
        total_balance=total_balance,
        aging=compute_aging(rows, today, scheme),
        avg_payment_days_paid=payment.avg_payment_days_paid,
        avg_payment_days_outstanding=payment.avg_payment_days_outstanding,
        transaction_count=len(rows),
        invoice_count=invoice_count,
    )


def aggregate_debtors_by_service_line(
    transactions: Iterable[DebtorTransaction],
    service_line_map: Mapping[str, str],
    today: date,
    scheme: AgingScheme = AGING_SCHEME_60,
) -> dict[str, DebtorMetrics]:
    """Compute debtor metrics per master service line.

    Args:
        transactions: Debtor rows.
        service_line_map: Mapping of external code to master code.
        today: Reference date for aging.
        scheme: Aging scheme to apply.

    Returns:
        dict[str, DebtorMetrics]: Metrics keyed by master code.
    """
    groups = partition_by_service_line(transactions, service_line_map)
    return {
        master_code: compute_debtor_metrics(rows, today, scheme)
        for master_code, rows in groups.items()
    }


def build_invoice_details(
    transactions: Iterable[DebtorTransaction],
    today: date,
    service_line_names: Mapping[str, str] | None = None,
) -> list[InvoiceDetail]:
    """Build the outstanding position of every invoice.

    Invoices without an invoice row and fully settled invoices are left out.

    Args:
        transactions: Debtor rows.
        today: Reference date for days outstanding.
        service_line_names: Optional mapping of external service-line code
            to a display name.

    Returns:
        list[InvoiceDetail]: Open invoices, oldest first.
    """
    names = service_line_names or {}
    details: list[InvoiceDetail] = []
    for invoice_number, group in _group_invoices(transactions).items():
        if group.invoice_date is None:
            continue
        net_balance = sum_decimals(row.amount for row in group.rows)
        if net_balance == 0:
            continue
        payments = [
            PaymentRecord(
                tran_date=to_day(row.tran_date),
                amount=abs(coerce_decimal(row.amount)),
                reference=row.reference,
            )
            for row in group.rows
            if is_payment_entry(row.entry_type)
        ]
        service_line = next(
            (
                normalize_service_line(row.service_line)
                for row in group.rows
                if normalize_service_line(row.service_line)
            ),
            None,
        )
        details.append(
            InvoiceDetail(
                invoice_number=invoice_number,
                invoice_date=group.invoice_date,
                original_amount=group.invoice_amount,
                payments_received=sum_decimals(
                    payment.amount for payment in payments
                ),
                net_balance=net_balance,
                days_outstanding=days_between(group.invoice_date, today),
                service_line=names.get(service_line, service_line)
                if service_line
                else None,
                payments=payments,
            )
        )
    return sorted(
        details,
        key=lambda detail: (detail.invoice_date, detail.invoice_number),
    )


def group_invoices_by_bucket(
    details: Iterable[InvoiceDetail],
    scheme: AgingScheme = AGING_SCHEME_30,
) -> dict[str, list[InvoiceDetail]]:
    """Group invoice details by the aging bucket of their days outstanding.

    Args:
        details: Invoice details.
        scheme: Aging scheme to apply.

    Returns:
        dict[str, list[InvoiceDetail]]: Every bucket key of the scheme, in
        order, mapped to its invoices.
    """
    grouped: dict[str, list[InvoiceDetail]] = {key: [] for key in scheme.keys}
    for detail in details:
        grouped[scheme.classify(detail.days_outstanding).key].append(detail)
    return grouped


__all__ = [
    "get_aging_scheme",
    "is_invoice_entry",
    "is_payment_entry",
    "compute_aging",
    "compute_payment_metrics",
    "compute_debtor_metrics",
    "aggregate_debtors_by_service_line",
    "build_invoice_details",
    "group_invoices_by_bucket",
]
