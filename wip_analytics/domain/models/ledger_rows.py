"""Domain models for ledger row data."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class WipTransaction:
    """Row representing a single work-in-progress ledger entry.

    Attributes:
        tran_date: Posting date (timestamps are truncated to the day).
        amount: Signed amount as recorded by the ledger.
        type_code: Primary classification code (time, fee, ...).
        sub_type_code: Optional refinement of the primary code.
        task_id: Task the row is linked to, if any.
        client_id: Client the row is linked to, if any.
        service_line: External service-line code of the task.
    """

    tran_date: date | datetime
    amount: Decimal
    type_code: str
    sub_type_code: str | None = None
    task_id: str | None = None
    client_id: str | None = None
    service_line: str | None = None


@dataclass(frozen=True)
class TypeSumRow:
    """Row representing amounts summed per type and sub-type at the source."""

    type_code: str
    amount: Decimal
    sub_type_code: str | None = None


@dataclass(frozen=True)
class DailyTypeSumRow:
    """Row representing amounts summed per day, type and sub-type."""

    tran_date: date | datetime
    type_code: str
    amount: Decimal
    sub_type_code: str | None = None


@dataclass(frozen=True)
class DebtorTransaction:
    """Row representing a debtor (receivables) ledger entry.

    Receipts carry negative amounts, invoices and credit notes positive ones.
    """

    tran_date: date | datetime
    amount: Decimal
    entry_type: str | None = None
    invoice_number: str | None = None
    service_line: str | None = None
    reference: str | None = None
    narration: str | None = None
    updated_at: datetime | None = None


__all__ = [
    "WipTransaction",
    "TypeSumRow",
    "DailyTypeSumRow",
    "DebtorTransaction",
]
