"""Tests for DashboardStats."""

from datetime import date
from decimal import Decimal

import pytest

from dashcache import (
    DashboardStats,
    DefaultKeyBuilder,
    FetchFailure,
    PaymentPeriod,
    ResourceCache,
    SubscriptionRecord,
    SubscriptionStatus,
)


@pytest.fixture
def stats(cache: ResourceCache, source) -> DashboardStats:
    """Create dashboard stats over the fake source."""
    return DashboardStats(cache, source, DefaultKeyBuilder())


class TestDashboardStats:
    """Tests for loading dashboard metrics."""

    async def test_load_aggregates_sources(self, stats, source, today) -> None:
        """Test metrics are derived from the three sources."""
        source.subscriptions = [
            SubscriptionRecord(
                id=1,
                status=SubscriptionStatus.ACTIVE,
                payment_amount=Decimal("1200"),
                payment_period=PaymentPeriod.YEARLY,
                paid_until=date(2026, 10, 31),
            ),
            SubscriptionRecord(
                id=2,
                status=SubscriptionStatus.ACTIVE,
                payment_amount=Decimal("300"),
                payment_period=PaymentPeriod.QUARTERLY,
            ),
        ]

        snapshot = await stats.load(today=today)

        assert snapshot.metrics.active_subscriptions == 2
        assert snapshot.metrics.expiring_soon == 1
        assert snapshot.metrics.monthly_total == 200
        assert snapshot.metrics.total_cashback == 1501
        assert snapshot.metrics.current_balance == 320
        assert len(snapshot.subscriptions) == 2

    async def test_second_load_served_from_cache(self, stats, source, today) -> None:
        """Test sources are read once while fresh."""
        await stats.load(today=today)
        await stats.load(today=today)

        assert source.calls == {"subscriptions": 1, "total": 1, "balance": 1}

    async def test_metrics_follow_source_changes(self, stats, cache, source, today) -> None:
        """Test metrics are recomputed when a source value changes."""
        first = await stats.load(today=today)
        source.balance = Decimal("10.6")
        cache.invalidate_prefix("/api/cashback/balance")

        second = await stats.load(today=today)

        assert first.metrics.current_balance == 320
        assert second.metrics.current_balance == 11

    async def test_failure_propagates(self, cache, source, today) -> None:
        """Test a cold source failure surfaces as FetchFailure."""
        async def broken() -> Decimal:
            raise ConnectionError("offline")

        source.fetch_cashback_total = broken
        stats = DashboardStats(cache, source, DefaultKeyBuilder())

        with pytest.raises(FetchFailure):
            await stats.load(today=today)

    async def test_prefetch_then_load(self, stats, source, today) -> None:
        """Test a prefetched dashboard loads without new fetches."""
        await stats.prefetch()
        await stats.load(today=today)

        assert source.calls == {"subscriptions": 1, "total": 1, "balance": 1}

    async def test_user_scoped_keys(self, cache, source, today) -> None:
        """Test a user id is added to every source key."""
        stats = DashboardStats(cache, source, DefaultKeyBuilder(), user_id=4)

        await stats.load(today=today)

        assert ("/api/subscriptions", "user:4") in cache
        assert ("/api/cashback/total", "user:4") in cache
