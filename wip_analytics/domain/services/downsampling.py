"""Downsampling of daily WIP series for charting."""

from collections.abc import Sequence

from wip_analytics.domain.models import DailyMetric


class InvalidTargetPointsError(ValueError):
    """Raised when a downsampling budget is not a positive integer."""


def downsample_daily_metrics(
    metrics: Sequence[DailyMetric],
    target_points: int = 120,
) -> list[DailyMetric]:
    """Reduce a daily series to roughly ``target_points`` points.

    Every day with activity is kept. Days without activity only carry the
    balance forward and are sampled at an even stride into the remaining
    slots, so the result can exceed the target when activity alone does.

    Args:
        metrics: Daily metrics keyed by ISO date.
        target_points: Desired number of points.

    Returns:
        list[DailyMetric]: Chronologically sorted subset of ``metrics``.

    Raises:
        InvalidTargetPointsError: If ``target_points`` is not positive.
    """
    if target_points <= 0:
        raise InvalidTargetPointsError(
            f"target_points must be positive, got {target_points}"
        )
    if len(metrics) <= target_points:
        return list(metrics)

    active = [metric for metric in metrics if metric.has_activity]
    idle = [metric for metric in metrics if not metric.has_activity]

    result = list(active)
    remaining_slots = target_points - len(active)
    if remaining_slots > 0 and idle:
        result.extend(_even_sample(idle, remaining_slots))

    return sorted(result, key=lambda metric: metric.date)


def _even_sample(
    items: Sequence[DailyMetric],
    slots: int,
) -> list[DailyMetric]:
    """Pick exactly ``slots`` items spread evenly across ``items``.

    The first item is always kept and consecutive picks are at most
    ``ceil(len(items) / slots)`` apart.
    """
    if slots >= len(items):
        return list(items)
    return [items[(index * len(items)) // slots] for index in range(slots)]


__all__ = ["downsample_daily_metrics", "InvalidTargetPointsError"]
