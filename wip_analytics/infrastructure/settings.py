"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

from wip_analytics.domain.constants import (
    DEFAULT_LOOKBACK_MONTHS,
    DEFAULT_RESOLUTION,
    RESOLUTION_TARGET_POINTS,
)
from wip_analytics.domain.models import AgingScheme
from wip_analytics.domain.services import get_aging_scheme
from wip_analytics.infrastructure.logging.logger import get_app_logger

DEFAULT_AGING_SCHEME = "aging_60"
DEFAULT_INVOICE_DETAIL_AGING_SCHEME = "aging_30"
DEFAULT_CACHE_TTL_SECONDS = 600


@dataclass(frozen=True)
class AnalyticsSettings:
    """Settings for the WIP and debtor analytics.

    Attributes:
        lookback_months: Length of the default WIP window.
        default_resolution: Resolution used when none is requested.
        aging_scheme: Name of the scheme used for debtor balances.
        invoice_detail_aging_scheme: Name of the scheme used for the invoice
            report.
        cache_ttl_seconds: Expiry of cached analytics results.
    """

    lookback_months: int = DEFAULT_LOOKBACK_MONTHS
    default_resolution: str = DEFAULT_RESOLUTION
    aging_scheme: str = DEFAULT_AGING_SCHEME
    invoice_detail_aging_scheme: str = DEFAULT_INVOICE_DETAIL_AGING_SCHEME
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS

    @classmethod
    def from_env(cls) -> "AnalyticsSettings":
        """Build settings from environment variables.

        Invalid values are logged and replaced by their defaults.

        Returns:
            AnalyticsSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        lookback_months = cls._read_positive_int(
            "WIP_LOOKBACK_MONTHS",
            DEFAULT_LOOKBACK_MONTHS,
            logger=logger,
        )
        cache_ttl_seconds = cls._read_positive_int(
            "ANALYTICS_CACHE_TTL_SECONDS",
            DEFAULT_CACHE_TTL_SECONDS,
            logger=logger,
        )
        resolution = (
            os.getenv("WIP_DEFAULT_RESOLUTION", DEFAULT_RESOLUTION)
            .strip()
            .lower()
        )
        if resolution not in RESOLUTION_TARGET_POINTS:
            logger.warning(
                f"Unknown WIP_DEFAULT_RESOLUTION '{resolution}', "
                f"using {DEFAULT_RESOLUTION}"
            )
            resolution = DEFAULT_RESOLUTION
        aging_scheme = cls._read_scheme(
            "AGING_SCHEME",
            DEFAULT_AGING_SCHEME,
            logger=logger,
        )
        invoice_scheme = cls._read_scheme(
            "INVOICE_DETAIL_AGING_SCHEME",
            DEFAULT_INVOICE_DETAIL_AGING_SCHEME,
            logger=logger,
        )
        return cls(
            lookback_months=lookback_months,
            default_resolution=resolution,
            aging_scheme=aging_scheme,
            invoice_detail_aging_scheme=invoice_scheme,
            cache_ttl_seconds=cache_ttl_seconds,
        )

    def resolve_aging_scheme(self) -> AgingScheme:
        """Return the scheme used for debtor balances."""
        return get_aging_scheme(self.aging_scheme)

    def resolve_invoice_detail_aging_scheme(self) -> AgingScheme:
        """Return the scheme used for the invoice report."""
        return get_aging_scheme(self.invoice_detail_aging_scheme)

    @staticmethod
    def _read_positive_int(name: str, default: int, logger) -> int:
        """Read a positive integer variable, falling back to ``default``.

        Args:
            name: Environment variable name.
            default: Value used when the variable is missing or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Invalid {name} '{raw}', using {default}")
            return default
        if value <= 0:
            logger.warning(f"Non-positive {name} '{raw}', using {default}")
            return default
        return value

    @staticmethod
    def _read_scheme(name: str, default: str, logger) -> str:
        raw = os.getenv(name, default).strip().lower()
        try:
            get_aging_scheme(raw)
        except ValueError:
            logger.warning(f"Unknown {name} '{raw}', using {default}")
            return default
        return raw


__all__ = ["AnalyticsSettings"]
