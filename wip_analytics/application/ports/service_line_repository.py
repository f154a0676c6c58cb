"""Port for reading service-line reference data."""

from typing import Protocol


class ServiceLineRepositoryPort(Protocol):
    """Port exposing the service-line mapping tables."""

    def fetch_service_line_mappings(self) -> dict[str, str]:
        """Return external service-line codes mapped to master codes."""

    def fetch_master_service_line_names(self) -> dict[str, str]:
        """Return master service-line codes mapped to display names."""


__all__ = ["ServiceLineRepositoryPort"]
