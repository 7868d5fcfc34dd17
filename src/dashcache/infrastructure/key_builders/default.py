"""Default key builder implementation."""

from dashcache.core.entities.cache_key import CacheKey, KeySegment, user_segment


class DefaultKeyBuilder:
    """Builds tuple keys of resource path, parameters and user scope.

    ``build("/api/cashback/history", 2, 10)`` gives
    ``("/api/cashback/history", 2, 10)``; with ``user_id=7`` a trailing
    ``"user:7"`` segment is added so the invalidator can find it.
    """

    def __init__(self, include_user: bool = True) -> None:
        """Initialize the key builder.

        Args:
            include_user: Whether to append the user segment when a
                user id is given.
        """
        self._include_user = include_user

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
        segments: list[KeySegment] = [resource, *params]
        if self._include_user and user_id is not None:
            segments.append(user_segment(user_id))
        return CacheKey(segments=tuple(segments))
