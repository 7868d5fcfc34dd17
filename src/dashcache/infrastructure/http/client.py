"""HTTP client for the dashboard API."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from decimal import Decimal
from typing import Any

import httpx

from dashcache.core.entities.client_config import ClientConfig
from dashcache.core.entities.ledger import LedgerPage
from dashcache.core.entities.records import (
    CashbackTransaction,
    SubscriptionRecord,
    to_decimal,
)
from dashcache.core.services.dashboard_stats import (
    CASHBACK_BALANCE_RESOURCE,
    CASHBACK_TOTAL_RESOURCE,
    SUBSCRIPTIONS_RESOURCE,
)
from dashcache.core.services.ledger_view import HISTORY_RESOURCE

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text
        super().__init__(f"{status_code}: {text}")

    @property
    def is_retryable(self) -> bool:
        """Server errors may succeed on retry; client errors will not."""
        return self.status_code >= 500


class DashboardApiClient:
    """Fetches dashboard data over HTTP.

    Implements ``IDashboardSource``. Transport errors and 5xx answers
    are retried ``config.retries`` times with ``config.retry_delay``
    between attempts. A 401 raises ``ApiError`` or, with
    ``on_unauthorized="return_none"``, yields empty data.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the API client.

        Args:
            config: Optional client configuration. Uses defaults if not provided.
            client: Optional preconfigured httpx client. One is created
                from ``config`` (and closed by ``aclose``) otherwise.
            sleep: Coroutine used to wait between retries.
        """
        self._config = config or ClientConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
        )
        self._sleep = sleep

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    async def __aenter__(self) -> "DashboardApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_subscriptions(self) -> list[SubscriptionRecord]:
        """Fetch the current user's subscriptions."""
        payload = await self._get_json(SUBSCRIPTIONS_RESOURCE)
        if payload is None:
            return []
        items = payload
        if isinstance(payload, dict):
            items = payload.get("subscriptions") or []
        return [SubscriptionRecord.from_dict(item) for item in items]

    async def fetch_cashback_total(self) -> Decimal:
        """Fetch the total cashback credited to the current user."""
        payload = await self._get_json(CASHBACK_TOTAL_RESOURCE)
        if payload is None:
            return Decimal(0)
        return to_decimal(payload.get("total"), Decimal(0))

    async def fetch_cashback_balance(self) -> Decimal:
        """Fetch the current cashback balance."""
        payload = await self._get_json(CASHBACK_BALANCE_RESOURCE)
        if payload is None:
            return Decimal(0)
        return to_decimal(payload.get("balance"), Decimal(0))

    async def fetch_cashback_history(self, page: int, limit: int) -> LedgerPage:
        """Fetch one page of cashback transactions."""
        payload = await self._get_json(
            HISTORY_RESOURCE, params={"page": page, "limit": limit}
        )
        if payload is None:
            return LedgerPage(page=page, page_size=limit)
        return LedgerPage(
            items=tuple(
                CashbackTransaction.from_dict(item)
                for item in payload.get("history") or []
            ),
            total=int(payload.get("total") or 0),
            page=page,
            page_size=limit,
        )

    async def _get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any | None:
        attempts = self._config.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await self._request(path, params)
            except httpx.TransportError as e:
                error: Exception = e
            except ApiError as e:
                if not e.is_retryable:
                    raise
                error = e

            if attempt == attempts:
                raise error
            logger.warning(
                "GET %s failed (%s), retrying in %.1fs",
                path,
                error,
                self._config.retry_delay,
            )
            await self._sleep(self._config.retry_delay)
        return None

    async def _request(self, path: str, params: dict[str, Any] | None) -> Any | None:
        logger.debug("GET %s %s", path, params or "")
        response = await self._client.get(path, params=params)
        logger.debug("GET %s -> %d", path, response.status_code)

        if response.status_code == 401:
            logger.error("Authentication error on %s (401 Unauthorized)", path)
            if self._config.on_unauthorized == "return_none":
                return None

        if response.is_error:
            raise ApiError(response.status_code, response.text or response.reason_phrase)
        return response.json()
