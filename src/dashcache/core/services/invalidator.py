"""User-scoped cache invalidation."""

import logging

from dashcache.core.entities.cache_key import CacheKey
from dashcache.core.interfaces.invalidator import IInvalidator
from dashcache.core.services.resource_cache import ResourceCache

logger = logging.getLogger(__name__)

# Resources that always belong to the signed-in user, whatever their key.
USER_SCOPED_RESOURCES: frozenset[str] = frozenset(
    {
        "/api/subscriptions",
        "/api/cashback/total",
        "/api/cashback/balance",
        "/api/cashback/transactions",
        "/api/cashback/history",
    }
)


class UserCacheInvalidator:
    """Evicts a user's cached data from a ResourceCache.

    An entry belongs to a user when its key carries a ``user:<id>``
    segment or its resource is one of ``USER_SCOPED_RESOURCES``.
    """

    def __init__(
        self,
        cache: ResourceCache,
        user_scoped_resources: frozenset[str] = USER_SCOPED_RESOURCES,
    ) -> None:
        self._cache = cache
        self._resources = user_scoped_resources

    def matches(self, key: CacheKey, user_id: int | str | None) -> bool:
        """Check whether a key belongs to ``user_id``."""
        if key.resource in self._resources:
            return True
        return user_id is not None and key.references_user(user_id)

    def evict_user(self, user_id: int | str | None) -> int:
        """Evict every entry belonging to a user.

        Args:
            user_id: The user whose data must no longer be served, or
                None to clear only the shared user-scoped resources.

        Returns:
            Number of entries evicted.
        """
        count = self._cache.invalidate(lambda key: self.matches(key, user_id))
        logger.info("Evicted %d cached entries for user %s", count, user_id)
        return count


class UserContext:
    """Tracks the signed-in user and evicts on every change.

    Call ``switch`` on login and ``switch(None)`` on logout. The
    previous user's data is evicted exactly once per change; switching
    to the same user does nothing.
    """

    def __init__(
        self,
        invalidator: IInvalidator,
        user_id: int | str | None = None,
    ) -> None:
        self._invalidator = invalidator
        self._user_id = user_id

    @property
    def user_id(self) -> int | str | None:
        return self._user_id

    def switch(self, user_id: int | str | None) -> bool:
        """Change the current user.

        Returns:
            True if the user changed and the cache was evicted.
        """
        if user_id == self._user_id:
            return False
        previous = self._user_id
        self._user_id = user_id
        self._invalidator.evict_user(previous)
        return True
