"""Key builder interface."""

from typing import Protocol

from dashcache.core.entities.cache_key import CacheKey, KeySegment


class IKeyBuilder(Protocol):
    """Contract for building resource cache keys."""

    def build(
        self,
        resource: str,
        *params: KeySegment,
        user_id: int | str | None = None,
    ) -> CacheKey:
        """Build the cache key for a resource read.

        Args:
            resource: The resource path, e.g. ``/api/subscriptions``.
            *params: Ordered parameters scoping the read.
            user_id: Optional user the read belongs to.

        Returns:
            The cache key.
        """
        ...
