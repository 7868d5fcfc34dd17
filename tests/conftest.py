"""Pytest configuration for dashcache tests."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from dashcache import (
    CacheConfig,
    CashbackTransaction,
    LedgerPage,
    ResourceCache,
    SubscriptionRecord,
    SubscriptionStatus,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSource:
    """In-memory dashboard source that counts calls."""

    def __init__(self) -> None:
        self.subscriptions = [
            SubscriptionRecord(
                id=1,
                status=SubscriptionStatus.ACTIVE,
                payment_amount=Decimal("120"),
            )
        ]
        self.total = Decimal("1500.7")
        self.balance = Decimal("320.4")
        self.transactions = [
            CashbackTransaction(
                id=i,
                user_id=1,
                amount=Decimal(i * 10 if i % 2 else -i),
                description=f"Transaction {i}",
                created_at=datetime(2026, 1, i, tzinfo=timezone.utc),
            )
            for i in range(1, 26)
        ]
        self.calls: dict[str, int] = {}

    def _count(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    async def fetch_subscriptions(self) -> list[SubscriptionRecord]:
        self._count("subscriptions")
        return list(self.subscriptions)

    async def fetch_cashback_total(self) -> Decimal:
        self._count("total")
        return self.total

    async def fetch_cashback_balance(self) -> Decimal:
        self._count("balance")
        return self.balance

    async def fetch_cashback_history(self, page: int, limit: int) -> LedgerPage:
        self._count("history")
        start = (page - 1) * limit
        return LedgerPage(
            items=tuple(self.transactions[start : start + limit]),
            total=len(self.transactions),
            page=page,
            page_size=limit,
        )


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResourceCache:
    """Create a resource cache driven by the fake clock."""
    return ResourceCache(config=CacheConfig(max_size=100), clock=clock)


@pytest.fixture
def source() -> FakeSource:
    """Create a fake dashboard source."""
    return FakeSource()


@pytest.fixture
def today() -> date:
    """A fixed reference date in the middle of a month."""
    return date(2026, 10, 19)
