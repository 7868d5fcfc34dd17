"""Resource cache - read-through cache for remote fetch results."""

import asyncio
import functools
import itertools
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from cachetools import LRUCache, TLRUCache  # type: ignore[import-untyped]

from dashcache.core.entities.cache_config import CacheConfig, ResourcePolicy
from dashcache.core.entities.cache_entry import CacheEntry
from dashcache.core.entities.cache_key import CacheKey, KeyLike
from dashcache.core.errors import (
    DashcacheError,
    FetchFailure,
    StaleServedWithBackgroundFailure,
)

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Any]]
KeyPredicate = Callable[[CacheKey], bool]
ErrorCallback = Callable[[StaleServedWithBackgroundFailure], None]


def _entry_expiry(key: CacheKey, entry: CacheEntry, now: float) -> float:
    return entry.expires_at


class ResourceCache:
    """Keyed store of fetch results with staleness and retention windows.

    Reads go through ``get``: a fresh entry is returned as is, a stale
    one is returned while a refresh runs in the background, and a
    missing one is fetched. Concurrent reads of the same key share a
    single in-flight fetch.

    Every started fetch is tagged with a generation drawn from a
    cache-wide counter. Only the fetch holding the key's current
    generation may write the entry, so a response that arrives after an
    invalidation or an explicit refresh is dropped. Generations are kept
    only while a fetch is in flight, and failures are remembered for at
    most ``max_size`` keys.

    The cache is meant to be used from a single event loop; bookkeeping
    never awaits between lookup and write.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        clock: Callable[[], float] | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Initialize the resource cache.

        Args:
            config: Optional cache configuration. Uses defaults if not provided.
            clock: Monotonic clock returning seconds. Defaults to
                ``time.monotonic``.
            on_error: Called with the failure when a background refresh
                fails behind a stale value.
        """
        self._config = config or CacheConfig()
        self._clock = clock or time.monotonic
        self._on_error = on_error
        self._entries: TLRUCache[CacheKey, CacheEntry] = TLRUCache(
            maxsize=self._config.max_size,
            ttu=_entry_expiry,
            timer=self._clock,
        )
        self._inflight: dict[CacheKey, asyncio.Task[Any]] = {}
        self._generations: dict[CacheKey, int] = {}
        self._next_generation = itertools.count(1)
        self._errors: LRUCache[CacheKey, DashcacheError] = LRUCache(
            maxsize=self._config.max_size
        )

        # Statistics
        self._hits = 0
        self._stale_hits = 0
        self._misses = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with fresh hits, stale hits, misses and total reads.
        """
        return {
            "hits": self._hits,
            "stale_hits": self._stale_hits,
            "misses": self._misses,
            "total": self._hits + self._stale_hits + self._misses,
        }

    async def get(
        self,
        key: KeyLike,
        fetcher: Fetcher,
        policy: ResourcePolicy | None = None,
    ) -> Any:
        """Read a value through the cache.

        Args:
            key: The cache key (string or tuple of primitives).
            fetcher: Zero-argument coroutine function producing the value.
            policy: Optional windows. Defaults to the configured policy
                for the key's resource.

        Returns:
            The cached or freshly fetched value.

        Raises:
            FetchFailure: If the value had to be fetched and the fetch failed.
        """
        cache_key = CacheKey.of(key)
        if not self._config.enabled:
            self._misses += 1
            return await _call_fetcher(cache_key, fetcher)

        effective_policy = policy or self._config.policy_for(cache_key.resource)
        now = self._clock()
        entry = self._lookup(cache_key, now)

        if entry is not None:
            if entry.is_fresh(now):
                self._hits += 1
                return entry.value

            self._stale_hits += 1
            if cache_key not in self._inflight:
                logger.debug("Serving stale %s while refreshing", cache_key)
                self._start_fetch(cache_key, fetcher, effective_policy)
            return entry.value

        self._misses += 1
        task = self._inflight.get(cache_key)
        if task is None:
            task = self._start_fetch(cache_key, fetcher, effective_policy)
        return await asyncio.shield(task)

    async def refresh(
        self,
        key: KeyLike,
        fetcher: Fetcher,
        policy: ResourcePolicy | None = None,
    ) -> Any:
        """Fetch a value now, superseding any fetch already in flight.

        The superseded fetch still answers its own callers, but its
        response is not stored. A disabled cache fetches without storing.

        Raises:
            FetchFailure: If the fetch failed.
        """
        cache_key = CacheKey.of(key)
        if not self._config.enabled:
            return await _call_fetcher(cache_key, fetcher)

        effective_policy = policy or self._config.policy_for(cache_key.resource)
        task = self._start_fetch(cache_key, fetcher, effective_policy)
        return await asyncio.shield(task)

    async def prefetch(
        self,
        key: KeyLike,
        fetcher: Fetcher,
        policy: ResourcePolicy | None = None,
    ) -> None:
        """Warm an entry ahead of a read.

        Does nothing if the cache is disabled or the entry is younger than
        the prefetch staleness window. Failures are logged, never raised.
        """
        if not self._config.enabled:
            return

        cache_key = CacheKey.of(key)
        effective_policy = (
            policy or self._config.prefetch_policy or self._config.default_policy
        )

        now = self._clock()
        entry = self._lookup(cache_key, now)
        if entry is not None and entry.age(now) < (
            effective_policy.stale_after.total_seconds()
        ):
            return

        task = self._inflight.get(cache_key)
        if task is None:
            task = self._start_fetch(cache_key, fetcher, effective_policy)
        try:
            await asyncio.shield(task)
        except FetchFailure as e:
            logger.warning("Prefetch of %s failed: %s", cache_key, e.cause)

    def peek(self, key: KeyLike) -> Any | None:
        """Get the stored value without fetching or counting a read."""
        entry = self._lookup(CacheKey.of(key), self._clock())
        return entry.value if entry is not None else None

    def last_error(self, key: KeyLike) -> DashcacheError | None:
        """Get the failure of the latest fetch for a key, if it failed.

        Cleared when a later fetch for the key succeeds.
        """
        return self._errors.get(CacheKey.of(key))

    def invalidate(self, predicate: KeyPredicate) -> int:
        """Remove every entry whose key satisfies ``predicate``.

        In-flight fetches for matching keys are abandoned: their
        responses are discarded, and the next read fetches again.

        Args:
            predicate: Called with each CacheKey.

        Returns:
            Number of entries removed.
        """
        self._entries.expire()

        count = 0
        for key in [k for k in list(self._entries.keys()) if predicate(k)]:
            if self._entries.pop(key, None) is not None:
                count += 1

        for key in [k for k in self._inflight if predicate(k)]:
            del self._inflight[key]
            self._generations.pop(key, None)

        for key in [k for k in self._errors if predicate(k)]:
            del self._errors[key]

        if count:
            logger.debug("Invalidated %d cache entries", count)
        return count

    def invalidate_prefix(self, prefix: KeyLike) -> int:
        """Remove every entry whose key starts with ``prefix``.

        Args:
            prefix: Leading key segments, e.g. ``"/api/subscriptions"``.

        Returns:
            Number of entries removed.
        """
        prefix_key = CacheKey.of(prefix)
        return self.invalidate(lambda key: key.startswith(prefix_key))

    def clear(self) -> None:
        """Clear all entries, abandon in-flight fetches and reset stats."""
        self._generations.clear()
        self._inflight.clear()
        self._entries.clear()
        self._errors.clear()
        self._hits = 0
        self._stale_hits = 0
        self._misses = 0

    def __len__(self) -> int:
        """Return the number of retained entries."""
        self._entries.expire()
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        """Check if a retained entry exists for the key."""
        if not isinstance(key, (CacheKey, str, tuple, list)):
            return False
        return CacheKey.of(key) in self._entries

    def _lookup(self, key: CacheKey, now: float) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(now):
            return None
        return entry

    def _start_fetch(
        self,
        key: CacheKey,
        fetcher: Fetcher,
        policy: ResourcePolicy,
    ) -> "asyncio.Task[Any]":
        generation = next(self._next_generation)
        self._generations[key] = generation

        task = asyncio.get_running_loop().create_task(
            self._run_fetch(key, fetcher, policy, generation)
        )
        self._inflight[key] = task
        task.add_done_callback(
            functools.partial(self._on_fetch_done, key, generation)
        )
        return task

    async def _run_fetch(
        self,
        key: CacheKey,
        fetcher: Fetcher,
        policy: ResourcePolicy,
        generation: int,
    ) -> Any:
        value = await _call_fetcher(key, fetcher)

        if self._generations.get(key) != generation:
            logger.debug("Discarding superseded response for %s", key)
            return value

        self._entries[key] = CacheEntry.create(
            key=key,
            value=value,
            now=self._clock(),
            policy=policy,
            generation=generation,
        )
        self._errors.pop(key, None)
        return value

    def _on_fetch_done(
        self,
        key: CacheKey,
        generation: int,
        task: "asyncio.Task[Any]",
    ) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        current = self._generations.get(key) == generation
        if current:
            del self._generations[key]
        if task.cancelled():
            return

        # Marks the exception as retrieved.
        error = task.exception()
        if error is None or not current:
            return

        cause = error.cause if isinstance(error, FetchFailure) else error
        if key in self._entries:
            failure = StaleServedWithBackgroundFailure(key, cause)
            self._errors[key] = failure
            logger.warning("%s", failure)
            if self._on_error is not None:
                self._on_error(failure)
        else:
            self._errors[key] = (
                error if isinstance(error, DashcacheError) else FetchFailure(key, cause)
            )
            logger.warning("Fetch of %s failed: %s", key, cause)


async def _call_fetcher(key: CacheKey, fetcher: Fetcher) -> Any:
    try:
        return await fetcher()
    except Exception as e:
        raise FetchFailure(key, e) from e
