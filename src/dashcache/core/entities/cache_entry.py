"""Cache entry entity."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from dashcache.core.entities.cache_config import ResourcePolicy
from dashcache.core.entities.cache_key import CacheKey


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Represents a fetched value with the clock reading at which it was
    stored, its staleness and retention windows, and the generation of
    the fetch that produced it.
    """

    key: CacheKey
    value: Any
    fetched_at: float
    stale_after: timedelta
    retain_until: timedelta
    generation: int = 0

    def age(self, now: float) -> float:
        """Get the entry age in seconds at ``now``."""
        return now - self.fetched_at

    def is_fresh(self, now: float) -> bool:
        """Check if the entry can be served without a refresh."""
        return self.age(now) < self.stale_after.total_seconds()

    def is_expired(self, now: float) -> bool:
        """Check if the entry is past its retention window."""
        return self.age(now) >= self.retain_until.total_seconds()

    @property
    def expires_at(self) -> float:
        """Get the clock reading at which the entry must be purged."""
        return self.fetched_at + self.retain_until.total_seconds()

    @classmethod
    def create(
        cls,
        key: CacheKey,
        value: Any,
        now: float,
        policy: ResourcePolicy,
        generation: int = 0,
    ) -> "CacheEntry":
        """Factory method to create a new cache entry.

        Args:
            key: The cache key.
            value: The fetched value.
            now: Current clock reading in seconds.
            policy: Staleness and retention windows.
            generation: Generation of the fetch that produced the value.

        Returns:
            A new CacheEntry instance.
        """
        return cls(
            key=key,
            value=value,
            fetched_at=now,
            stale_after=policy.stale_after,
            retain_until=policy.retain_until,
            generation=generation,
        )
