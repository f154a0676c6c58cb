"""Domain policies package."""

from .resolution import normalize_resolution, resolve_target_points

__all__ = ["normalize_resolution", "resolve_target_points"]
