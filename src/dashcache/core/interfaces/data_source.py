"""Dashboard data source interface."""

from decimal import Decimal
from typing import Protocol

from dashcache.core.entities.ledger import LedgerPage
from dashcache.core.entities.records import SubscriptionRecord


class IDashboardSource(Protocol):
    """Contract for the remote store behind the dashboard.

    The caches never talk to the network themselves; they call these
    methods through fetchers and treat any exception as a failed fetch.
    """

    async def fetch_subscriptions(self) -> list[SubscriptionRecord]:
        """Fetch the current user's subscriptions.

        Returns:
            The subscription records.
        """
        ...

    async def fetch_cashback_total(self) -> Decimal:
        """Fetch the total cashback ever credited to the current user.

        Returns:
            The unrounded total.
        """
        ...

    async def fetch_cashback_balance(self) -> Decimal:
        """Fetch the current cashback balance.

        Returns:
            The unrounded balance.
        """
        ...

    async def fetch_cashback_history(self, page: int, limit: int) -> LedgerPage:
        """Fetch one page of cashback transactions.

        Args:
            page: 1-based page number.
            limit: Page size.

        Returns:
            The page with the total transaction count.
        """
        ...
