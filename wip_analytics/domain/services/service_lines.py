"""Partitioning of ledger rows by master service line."""

from collections.abc import Callable, Iterable, Mapping
from typing import TypeVar

from wip_analytics.domain.constants import UNKNOWN_SERVICE_LINE
from wip_analytics.domain.services.normalization import normalize_service_line

RowT = TypeVar("RowT")


def resolve_master_service_line(
    service_line: str | None,
    service_line_map: Mapping[str, str],
) -> str:
    """Return the master service line of an external service-line code.

    Args:
        service_line: External service-line code carried by a row.
        service_line_map: Mapping of external code to master code.

    Returns:
        str: Master code, or ``UNKNOWN`` when the code is not mapped.
    """
    code = normalize_service_line(service_line)
    if code is None:
        return UNKNOWN_SERVICE_LINE
    return service_line_map.get(code) or UNKNOWN_SERVICE_LINE


def partition_by_service_line(
    rows: Iterable[RowT],
    service_line_map: Mapping[str, str],
    key: Callable[[RowT], str | None] = lambda row: row.service_line,
) -> dict[str, list[RowT]]:
    """Group rows by master service line, keeping first-seen order.

    Args:
        rows: WIP or debtor rows.
        service_line_map: Mapping of external code to master code.
        key: Accessor returning the external service-line code of a row.

    Returns:
        dict[str, list]: Rows per master service-line code.
    """
    groups: dict[str, list[RowT]] = {}
    for row in rows:
        master = resolve_master_service_line(key(row), service_line_map)
        groups.setdefault(master, []).append(row)
    return groups


__all__ = ["resolve_master_service_line", "partition_by_service_line"]
