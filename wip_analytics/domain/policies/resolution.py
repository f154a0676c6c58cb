"""Policy mapping chart resolutions to point budgets."""

from wip_analytics.domain.constants import (
    DEFAULT_RESOLUTION,
    RESOLUTION_TARGET_POINTS,
)


def normalize_resolution(resolution: str | None) -> str:
    """Return a known resolution name, falling back to the default.

    Args:
        resolution: User-facing resolution (``low``, ``standard``, ``high``).

    Returns:
        str: Known resolution name.
    """
    candidate = (resolution or "").strip().lower()
    if candidate in RESOLUTION_TARGET_POINTS:
        return candidate
    return DEFAULT_RESOLUTION


def resolve_target_points(resolution: str | None) -> int:
    """Return the downsampling budget of a resolution.

    Args:
        resolution: User-facing resolution name.

    Returns:
        int: Target number of chart points.
    """
    return RESOLUTION_TARGET_POINTS[normalize_resolution(resolution)]


__all__ = ["normalize_resolution", "resolve_target_points"]
