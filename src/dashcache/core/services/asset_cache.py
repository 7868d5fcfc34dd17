"""Binary asset cache - verified-loadable asset handles."""

import asyncio
import logging
from collections.abc import Iterable

from cachetools import LRUCache  # type: ignore[import-untyped]

from dashcache.core.entities.asset import AssetResolution
from dashcache.core.entities.cache_config import CacheConfig
from dashcache.core.errors import LoadVerificationFailure
from dashcache.core.interfaces.asset_loader import IAssetLoader

logger = logging.getLogger(__name__)


class AssetCache:
    """Keyed store of assets (icons, images) known to load.

    A locator is stored only after the loader verified it, mapping to
    itself. Failed loads are never stored, so the next resolve retries.
    Entries do not expire by time; the store is bounded by size only.
    """

    def __init__(self, loader: IAssetLoader, config: CacheConfig | None = None) -> None:
        """Initialize the asset cache.

        Args:
            loader: Verifies that a locator can be loaded.
            config: Optional cache configuration; ``asset_maxsize`` bounds
                the number of verified locators kept.
        """
        config = config or CacheConfig()
        self._loader = loader
        self._verified: LRUCache[str, str] = LRUCache(maxsize=config.asset_maxsize)
        self._inflight: dict[str, asyncio.Task[AssetResolution]] = {}

    def resolve(self, locator: str | None) -> AssetResolution:
        """Resolve a locator without waiting.

        A missing locator is ready with no handle (render a placeholder).
        A verified locator is ready at once. Anything else starts a
        verification in the background, shared with any load already in
        flight, and reports loading. Must be called from a running event
        loop.

        Args:
            locator: The asset locator, or None.

        Returns:
            The current resolution.
        """
        if not locator:
            return AssetResolution.ready(None)

        handle = self._verified.get(locator)
        if handle is not None:
            return AssetResolution.ready(handle)

        self._ensure_load(locator)
        return AssetResolution.loading()

    async def load(self, locator: str | None) -> AssetResolution:
        """Resolve a locator, waiting for verification if needed.

        Returns:
            A ready or error resolution, never loading.
        """
        if not locator:
            return AssetResolution.ready(None)

        resolution = self.resolve(locator)
        if resolution.is_ready:
            return resolution
        return await asyncio.shield(self._ensure_load(locator))

    def preload(self, locators: Iterable[str]) -> list["asyncio.Task[AssetResolution]"]:
        """Start verification for every locator not yet cached.

        Returns:
            The in-flight load tasks, for callers that want to await them.
        """
        tasks = []
        for locator in locators:
            if locator and locator not in self._verified:
                tasks.append(self._ensure_load(locator))
        return tasks

    def clear(self) -> None:
        """Forget every verified locator."""
        self._verified.clear()

    def __len__(self) -> int:
        return len(self._verified)

    def __contains__(self, locator: object) -> bool:
        return locator in self._verified

    def _ensure_load(self, locator: str) -> "asyncio.Task[AssetResolution]":
        task = self._inflight.get(locator)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._verify(locator))
            self._inflight[locator] = task
        return task

    async def _verify(self, locator: str) -> AssetResolution:
        try:
            await self._loader.load(locator)
        except Exception as e:
            failure = LoadVerificationFailure(locator, e)
            logger.warning("%s", failure)
            return AssetResolution.failed(failure)
        else:
            self._verified[locator] = locator
            return AssetResolution.ready(locator)
        finally:
            self._inflight.pop(locator, None)
