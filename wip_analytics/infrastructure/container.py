"""Composition root for wiring infrastructure adapters."""

from wip_analytics.application.ports.database import DatabaseEnginePort
from wip_analytics.application.ports.debtor_repository import (
    DebtorTransactionRepositoryPort,
)
from wip_analytics.application.ports.result_cache import ResultCachePort
from wip_analytics.application.ports.service_line_repository import (
    ServiceLineRepositoryPort,
)
from wip_analytics.application.ports.wip_repository import (
    WipTransactionRepositoryPort,
)
from wip_analytics.application.use_cases import (
    GetDebtorAnalyticsUseCase,
    GetDebtorInvoiceDetailsUseCase,
    GetWipAnalyticsUseCase,
    GetWipBalancesUseCase,
)
from wip_analytics.infrastructure.cache import InMemoryResultCache
from wip_analytics.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from wip_analytics.infrastructure.debtor_repository import (
    SqlAlchemyDebtorTransactionRepository,
)
from wip_analytics.infrastructure.logging.logger import get_app_logger
from wip_analytics.infrastructure.service_line_repository import (
    SqlAlchemyServiceLineRepository,
)
from wip_analytics.infrastructure.settings import AnalyticsSettings
from wip_analytics.infrastructure.wip_repository import (
    SqlAlchemyWipTransactionRepository,
)

_result_cache: InMemoryResultCache | None = None


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_result_cache() -> ResultCachePort:
    """Return the process-wide result cache."""
    global _result_cache
    if _result_cache is None:
        _result_cache = InMemoryResultCache()
    return _result_cache


def build_wip_repository(
    db_port: DatabaseEnginePort | None = None,
) -> WipTransactionRepositoryPort:
    """Return the WIP ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyWipTransactionRepository(resolved_db)


def build_debtor_repository(
    db_port: DatabaseEnginePort | None = None,
) -> DebtorTransactionRepositoryPort:
    """Return the debtor ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyDebtorTransactionRepository(resolved_db)


def build_service_line_repository(
    db_port: DatabaseEnginePort | None = None,
) -> ServiceLineRepositoryPort:
    """Return the service-line reference repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyServiceLineRepository(resolved_db)


def build_wip_analytics_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: AnalyticsSettings | None = None,
) -> GetWipAnalyticsUseCase:
    """Return the WIP analytics use case wired to SQLAlchemy adapters."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or AnalyticsSettings.from_env()
    return GetWipAnalyticsUseCase(
        build_wip_repository(resolved_db),
        service_line_repository=build_service_line_repository(resolved_db),
        cache=build_result_cache(),
        logger=get_app_logger(),
        lookback_months=resolved_settings.lookback_months,
        cache_ttl_seconds=resolved_settings.cache_ttl_seconds,
    )


def build_wip_balances_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetWipBalancesUseCase:
    """Return the WIP balances use case."""
    resolved_db = db_port or build_database_adapter()
    return GetWipBalancesUseCase(
        build_wip_repository(resolved_db),
        logger=get_app_logger(),
    )


def build_debtor_analytics_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: AnalyticsSettings | None = None,
) -> GetDebtorAnalyticsUseCase:
    """Return the debtor analytics use case."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or AnalyticsSettings.from_env()
    return GetDebtorAnalyticsUseCase(
        build_debtor_repository(resolved_db),
        service_line_repository=build_service_line_repository(resolved_db),
        cache=build_result_cache(),
        logger=get_app_logger(),
        scheme=resolved_settings.resolve_aging_scheme(),
        cache_ttl_seconds=resolved_settings.cache_ttl_seconds,
    )


def build_debtor_invoice_details_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: AnalyticsSettings | None = None,
) -> GetDebtorInvoiceDetailsUseCase:
    """Return the invoice detail report use case."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or AnalyticsSettings.from_env()
    return GetDebtorInvoiceDetailsUseCase(
        build_debtor_repository(resolved_db),
        service_line_repository=build_service_line_repository(resolved_db),
        logger=get_app_logger(),
        scheme=resolved_settings.resolve_invoice_detail_aging_scheme(),
    )


__all__ = [
    "build_database_adapter",
    "build_result_cache",
    "build_wip_repository",
    "build_debtor_repository",
    "build_service_line_repository",
    "build_wip_analytics_use_case",
    "build_wip_balances_use_case",
    "build_debtor_analytics_use_case",
    "build_debtor_invoice_details_use_case",
]
