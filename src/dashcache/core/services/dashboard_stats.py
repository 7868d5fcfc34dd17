"""Dashboard stats - cached reads feeding the metrics aggregator."""

import asyncio
from datetime import date

from dashcache.core.entities.cache_key import CacheKey
from dashcache.core.entities.metrics import DashboardSnapshot
from dashcache.core.interfaces.data_source import IDashboardSource
from dashcache.core.interfaces.key_builder import IKeyBuilder
from dashcache.core.services.metrics_aggregator import aggregate
from dashcache.core.services.resource_cache import ResourceCache

SUBSCRIPTIONS_RESOURCE = "/api/subscriptions"
CASHBACK_TOTAL_RESOURCE = "/api/cashback/total"
CASHBACK_BALANCE_RESOURCE = "/api/cashback/balance"


class DashboardStats:
    """Reads the three dashboard sources through the cache and aggregates.

    Metrics are recomputed on every ``load``; only the raw collections
    are cached, each under its own resource policy.
    """

    def __init__(
        self,
        cache: ResourceCache,
        source: IDashboardSource,
        key_builder: IKeyBuilder,
        user_id: int | str | None = None,
    ) -> None:
        self._cache = cache
        self._source = source
        self._key_builder = key_builder
        self._user_id = user_id

    async def load(self, today: date | None = None) -> DashboardSnapshot:
        """Read the sources and compute the metrics.

        Args:
            today: Optional reference date for the expiry window.

        Returns:
            The metrics and the subscriptions they came from.

        Raises:
            FetchFailure: If a source had to be fetched and failed.
        """
        subscriptions, total_cashback, balance = await asyncio.gather(
            self._cache.get(
                self._key(SUBSCRIPTIONS_RESOURCE), self._source.fetch_subscriptions
            ),
            self._cache.get(
                self._key(CASHBACK_TOTAL_RESOURCE), self._source.fetch_cashback_total
            ),
            self._cache.get(
                self._key(CASHBACK_BALANCE_RESOURCE),
                self._source.fetch_cashback_balance,
            ),
        )
        metrics = aggregate(subscriptions, total_cashback, balance, today=today)
        return DashboardSnapshot(metrics=metrics, subscriptions=tuple(subscriptions))

    async def prefetch(self) -> None:
        """Warm the three sources ahead of the dashboard being shown."""
        await asyncio.gather(
            self._cache.prefetch(
                self._key(SUBSCRIPTIONS_RESOURCE), self._source.fetch_subscriptions
            ),
            self._cache.prefetch(
                self._key(CASHBACK_TOTAL_RESOURCE), self._source.fetch_cashback_total
            ),
            self._cache.prefetch(
                self._key(CASHBACK_BALANCE_RESOURCE),
                self._source.fetch_cashback_balance,
            ),
        )

    def _key(self, resource: str) -> CacheKey:
        return self._key_builder.build(resource, user_id=self._user_id)
