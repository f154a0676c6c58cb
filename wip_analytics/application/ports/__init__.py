"""Application ports package."""

from .database import DatabaseEnginePort
from .debtor_repository import DebtorTransactionRepositoryPort
from .result_cache import ResultCachePort
from .service_line_repository import ServiceLineRepositoryPort
from .transaction_scope import TransactionScope
from .wip_repository import WipTransactionRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "DebtorTransactionRepositoryPort",
    "ResultCachePort",
    "ServiceLineRepositoryPort",
    "TransactionScope",
    "WipTransactionRepositoryPort",
]
