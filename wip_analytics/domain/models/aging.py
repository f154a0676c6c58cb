"""Domain models for debtor aging schemes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AgeBucket:
    """Definition of an aging bucket.

    Attributes:
        key: Stable identifier used in payloads (e.g. ``days61_90``).
        label: Human readable label.
        min_days: Inclusive lower bound in days.
        max_days: Inclusive upper bound in days, None when unbounded.
    """

    key: str
    label: str
    min_days: int
    max_days: int | None

    def __post_init__(self) -> None:
        if self.min_days < 0:
            raise ValueError("min_days cannot be negative")
        if self.max_days is not None and self.max_days < self.min_days:
            raise ValueError("max_days cannot be less than min_days")

    def contains(self, age_days: int) -> bool:
        """Return True when ``age_days`` falls within the bucket."""
        if age_days < self.min_days:
            return False
        if self.max_days is None:
            return True
        return age_days <= self.max_days


@dataclass(frozen=True)
class AgingScheme:
    """Ordered, contiguous set of aging buckets starting at day zero."""

    name: str
    buckets: tuple[AgeBucket, ...]

    def __post_init__(self) -> None:
        if not self.buckets:
            raise ValueError("An aging scheme needs at least one bucket")
        expected_min = 0
        for bucket in self.buckets:
            if bucket.min_days != expected_min:
                raise ValueError(
                    f"Aging scheme {self.name} is not contiguous at "
                    f"{bucket.key}"
                )
            if bucket.max_days is None:
                expected_min = None
                continue
            expected_min = bucket.max_days + 1
        if self.buckets[-1].max_days is not None:
            raise ValueError(
                f"Aging scheme {self.name} must end with an open bucket"
            )

    @property
    def keys(self) -> tuple[str, ...]:
        """Return the bucket keys in order."""
        return tuple(bucket.key for bucket in self.buckets)

    def classify(self, age_days: int) -> AgeBucket:
        """Return the bucket for an age; negative ages are current."""
        if age_days < 0:
            return self.buckets[0]
        for bucket in self.buckets:
            if bucket.contains(age_days):
                return bucket
        return self.buckets[-1]


__all__ = ["AgeBucket", "AgingScheme"]
