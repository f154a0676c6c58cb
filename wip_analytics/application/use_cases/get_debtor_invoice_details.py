"""Use case to list open invoices grouped by aging bucket."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from wip_analytics.application.ports.debtor_repository import (
    DebtorTransactionRepositoryPort,
)
from wip_analytics.application.ports.service_line_repository import (
    ServiceLineRepositoryPort,
)
from wip_analytics.domain.constants import AGING_SCHEME_30
from wip_analytics.domain.models import AgingScheme, InvoiceDetail
from wip_analytics.domain.services import (
    build_invoice_details,
    group_invoices_by_bucket,
)
from wip_analytics.infrastructure.logging.logger import get_app_logger
from wip_analytics.utils.decimal_utils import sum_decimals


@dataclass(frozen=True)
class InvoiceDetailsReport:
    """Open invoices of a client set grouped by aging bucket."""

    scheme_name: str
    buckets: dict[str, list[InvoiceDetail]]
    bucket_labels: dict[str, str]

    @property
    def invoice_count(self) -> int:
        """Return the number of open invoices."""
        return sum(len(items) for items in self.buckets.values())

    @property
    def total_outstanding(self) -> Decimal:
        """Return the summed net balance of every open invoice."""
        return sum_decimals(
            detail.net_balance
            for items in self.buckets.values()
            for detail in items
        )


class GetDebtorInvoiceDetailsUseCase:
    """Build the invoice-level debtor report."""

    def __init__(
        self,
        debtor_repository: DebtorTransactionRepositoryPort,
        service_line_repository: ServiceLineRepositoryPort | None = None,
        logger=None,
        scheme: AgingScheme = AGING_SCHEME_30,
    ) -> None:
        """Initialize the use case.

        Args:
            debtor_repository: Port providing debtor rows.
            service_line_repository: Optional port providing display names.
            logger: Optional logger compatible with logging.Logger-like API.
            scheme: Aging scheme used to group invoices.
        """
        self._debtor_repository = debtor_repository
        self._service_line_repository = service_line_repository
        self._logger = logger or get_app_logger()
        self._scheme = scheme

    def execute(
        self,
        client_ids: tuple[str, ...],
        today: date | None = None,
    ) -> InvoiceDetailsReport:
        """Return open invoices of the clients grouped by bucket.

        Args:
            client_ids: Clients whose invoices are listed.
            today: Reference date; defaults to the current date.

        Returns:
            InvoiceDetailsReport: Every bucket of the scheme with its invoices.
        """
        reference = today or date.today()
        rows = self._debtor_repository.fetch_transactions(tuple(client_ids))
        names = self._display_names()
        details = build_invoice_details(rows, reference, names)
        report = InvoiceDetailsReport(
            scheme_name=self._scheme.name,
            buckets=group_invoices_by_bucket(details, self._scheme),
            bucket_labels={
                bucket.key: bucket.label for bucket in self._scheme.buckets
            },
        )
        self._logger.info(
            f"Built invoice details from {len(rows)} debtor rows: "
            f"{report.invoice_count} open invoices"
        )
        return report

    def _display_names(self) -> dict[str, str]:
        if self._service_line_repository is None:
            return {}
        mappings = self._service_line_repository.fetch_service_line_mappings()
        masters = self._service_line_repository.fetch_master_service_line_names()
        return {
            code: masters[master]
            for code, master in mappings.items()
            if master in masters
        }


__all__ = ["GetDebtorInvoiceDetailsUseCase", "InvoiceDetailsReport"]
