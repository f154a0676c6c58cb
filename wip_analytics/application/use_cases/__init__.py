"""Application use cases package."""

from .get_debtor_analytics import DebtorAnalyticsView, GetDebtorAnalyticsUseCase
from .get_debtor_invoice_details import (
    GetDebtorInvoiceDetailsUseCase,
    InvoiceDetailsReport,
)
from .get_wip_analytics import GetWipAnalyticsUseCase, WipAnalyticsView
from .get_wip_balances import GetWipBalancesUseCase

__all__ = [
    "GetWipAnalyticsUseCase",
    "WipAnalyticsView",
    "GetWipBalancesUseCase",
    "GetDebtorAnalyticsUseCase",
    "DebtorAnalyticsView",
    "GetDebtorInvoiceDetailsUseCase",
    "InvoiceDetailsReport",
]
