"""Ledger view - paginated cashback transaction history."""

from dashcache.core.entities.cache_config import ResourcePolicy
from dashcache.core.entities.ledger import LedgerPage
from dashcache.core.interfaces.data_source import IDashboardSource
from dashcache.core.interfaces.key_builder import IKeyBuilder
from dashcache.core.services.resource_cache import ResourceCache

HISTORY_RESOURCE = "/api/cashback/history"


class LedgerView:
    """Read-only, page-at-a-time view over the transaction history.

    Each page is fetched on its own and cached under a key that
    includes the page number and size, so pages never merge. Callers
    clamp page numbers (see ``LedgerPage.clamp``) before asking.
    """

    def __init__(
        self,
        cache: ResourceCache,
        source: IDashboardSource,
        key_builder: IKeyBuilder,
        page_size: int = 10,
        user_id: int | str | None = None,
        policy: ResourcePolicy | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._cache = cache
        self._source = source
        self._key_builder = key_builder
        self._page_size = page_size
        self._user_id = user_id
        self._policy = policy

    @property
    def page_size(self) -> int:
        return self._page_size

    async def page(self, page_number: int, page_size: int | None = None) -> LedgerPage:
        """Get one page of transactions.

        Args:
            page_number: 1-based page number, already clamped.
            page_size: Optional override of the default page size.

        Returns:
            The page with the total transaction count.

        Raises:
            ValueError: If the page number or size is below 1.
            FetchFailure: If the page could not be fetched.
        """
        size = self._page_size if page_size is None else page_size
        if page_number < 1:
            raise ValueError("page_number must be at least 1")
        if size < 1:
            raise ValueError("page_size must be positive")

        key = self._key_builder.build(
            HISTORY_RESOURCE, page_number, size, user_id=self._user_id
        )

        async def fetch() -> LedgerPage:
            return await self._source.fetch_cashback_history(page_number, size)

        return await self._cache.get(key, fetch, self._policy)
