"""Tests for core entities."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from dashcache.core.entities import (
    CacheConfig,
    CacheEntry,
    CacheKey,
    CashbackTransaction,
    ClientConfig,
    LedgerPage,
    PaymentPeriod,
    ResourcePolicy,
    SubscriptionRecord,
    SubscriptionStatus,
    clamp_page,
)


class TestCacheEntry:
    """Tests for CacheEntry entity."""

    def test_create_cache_entry(self) -> None:
        """Test creating a cache entry with factory method."""
        policy = ResourcePolicy(
            stale_after=timedelta(seconds=30),
            retain_until=timedelta(minutes=5),
        )
        entry = CacheEntry.create(
            key=CacheKey.of("/api/subscriptions"),
            value=[1, 2],
            now=100.0,
            policy=policy,
            generation=3,
        )

        assert entry.value == [1, 2]
        assert entry.fetched_at == 100.0
        assert entry.stale_after == timedelta(seconds=30)
        assert entry.generation == 3
        assert entry.expires_at == 400.0

    def test_freshness_window(self) -> None:
        """Test fresh strictly before stale_after, expired from retain_until."""
        entry = CacheEntry.create(
            key=CacheKey.of("k"),
            value="value",
            now=0.0,
            policy=ResourcePolicy(
                stale_after=timedelta(seconds=30),
                retain_until=timedelta(seconds=60),
            ),
        )

        assert entry.is_fresh(29.9)
        assert not entry.is_fresh(30.0)
        assert not entry.is_expired(59.9)
        assert entry.is_expired(60.0)

    def test_cache_entry_immutable(self) -> None:
        """Test that CacheEntry is immutable."""
        entry = CacheEntry.create(
            key=CacheKey.of("k"), value="value", now=0.0, policy=ResourcePolicy()
        )

        with pytest.raises(AttributeError):
            entry.value = "other"  # type: ignore


class TestCacheKey:
    """Tests for CacheKey value object."""

    def test_string_normalized_to_single_segment(self) -> None:
        """Test a bare string becomes a one-segment key."""
        key = CacheKey.of("/api/subscriptions")

        assert key.segments == ("/api/subscriptions",)
        assert key.resource == "/api/subscriptions"

    def test_tuple_and_list_keys_are_equal(self) -> None:
        """Test tuple and list inputs normalize to the same key."""
        assert CacheKey.of(("/api/cashback/history", 1, 10)) == CacheKey.of(
            ["/api/cashback/history", 1, 10]
        )

    def test_str(self) -> None:
        """Test string rendering of a key."""
        assert str(CacheKey.of(("/api/x", 2, None))) == "/api/x:2:"

    def test_startswith(self) -> None:
        """Test prefix matching on leading segments."""
        key = CacheKey.of(("/api/subscriptions", 7))

        assert key.startswith("/api/subscriptions")
        assert key.startswith(("/api/subscriptions", 7))
        assert not key.startswith(("/api/subscriptions", 8))
        assert not key.startswith("/api/subs")

    def test_references_user_exact_segment(self) -> None:
        """Test user references match whole segments only."""
        key = CacheKey.of(("/api/profile", "user:12"))

        assert key.references_user(12)
        assert not key.references_user(1)

    def test_empty_key_rejected(self) -> None:
        """Test a key needs at least one segment."""
        with pytest.raises(ValueError):
            CacheKey(segments=())

    def test_non_primitive_segment_rejected(self) -> None:
        """Test segments must be primitives."""
        with pytest.raises(TypeError):
            CacheKey.of(("/api/x", {"page": 1}))  # type: ignore


class TestCacheConfig:
    """Tests for CacheConfig entity."""

    def test_default_config(self) -> None:
        """Test default configuration values."""
        config = CacheConfig()

        assert config.enabled is True
        assert config.default_policy.stale_after == timedelta(seconds=30)
        assert config.default_policy.retain_until == timedelta(minutes=5)
        assert config.prefetch_policy is not None
        assert config.prefetch_policy.stale_after == timedelta(minutes=1)
        assert config.max_size == 1000

    def test_resource_policies(self) -> None:
        """Test per-resource policy lookup with fallback."""
        config = CacheConfig()

        assert config.policy_for("/api/subscriptions").stale_after == timedelta(
            minutes=1
        )
        assert config.policy_for("/api/cashback/balance").retain_until == timedelta(
            minutes=3
        )
        assert config.policy_for("/api/unknown") == config.default_policy

    def test_retain_shorter_than_stale_rejected(self) -> None:
        """Test policy validation."""
        with pytest.raises(ValueError):
            ResourcePolicy(
                stale_after=timedelta(minutes=2),
                retain_until=timedelta(minutes=1),
            )


class TestClientConfig:
    """Tests for ClientConfig entity."""

    def test_base_url_normalized(self) -> None:
        """Test trailing slash is stripped."""
        assert ClientConfig(base_url="http://api/").base_url == "http://api"

    def test_unknown_unauthorized_behavior(self) -> None:
        """Test unknown 401 behavior is rejected."""
        with pytest.raises(ValueError):
            ClientConfig(on_unauthorized="ignore")  # type: ignore


class TestSubscriptionRecord:
    """Tests for SubscriptionRecord parsing."""

    def test_from_dict(self) -> None:
        """Test parsing a camelCase payload."""
        record = SubscriptionRecord.from_dict(
            {
                "id": 5,
                "status": "active",
                "paymentAmount": 199.99,
                "paymentPeriod": "quarterly",
                "paidUntil": "2026-10-31T00:00:00.000Z",
            }
        )

        assert record.status is SubscriptionStatus.ACTIVE
        assert record.payment_amount == Decimal("199.99")
        assert record.payment_period is PaymentPeriod.QUARTERLY
        assert record.paid_until == date(2026, 10, 31)
        assert record.is_active

    def test_missing_amount_defaults_to_zero(self) -> None:
        """Test missing amount and period."""
        record = SubscriptionRecord.from_dict({"id": 1, "status": "pending"})

        assert record.payment_amount == Decimal(0)
        assert record.payment_period is None
        assert record.paid_until is None

    def test_unknown_period_kept_as_none(self) -> None:
        """Test unrecognized periods parse to None."""
        record = SubscriptionRecord.from_dict(
            {"id": 1, "status": "active", "paymentPeriod": "weekly"}
        )

        assert record.payment_period is None

    def test_unknown_status_rejected(self) -> None:
        """Test unknown statuses are an error."""
        with pytest.raises(ValueError):
            SubscriptionRecord.from_dict({"id": 1, "status": "paused"})

    def test_negative_amount_rejected(self) -> None:
        """Test negative payment amounts are an error."""
        with pytest.raises(ValueError):
            SubscriptionRecord.from_dict(
                {"id": 1, "status": "active", "paymentAmount": -1}
            )


class TestCashbackTransaction:
    """Tests for CashbackTransaction parsing."""

    def test_from_dict_credit_and_debit(self) -> None:
        """Test sign decides credit or debit."""
        credit = CashbackTransaction.from_dict(
            {
                "id": 1,
                "userId": 3,
                "amount": 12.5,
                "description": "Netflix cashback",
                "createdAt": "2026-10-01T12:00:00Z",
            }
        )
        debit = CashbackTransaction.from_dict(
            {
                "id": 2,
                "userId": 3,
                "amount": "-5",
                "description": "Payout",
                "createdAt": "2026-10-02T12:00:00+00:00",
            }
        )

        assert credit.is_credit
        assert credit.amount == Decimal("12.5")
        assert credit.created_at == datetime(2026, 10, 1, 12, tzinfo=timezone.utc)
        assert not debit.is_credit


class TestLedgerPage:
    """Tests for LedgerPage entity and clamping."""

    def test_page_count(self) -> None:
        """Test page count rounds up and is at least one."""
        assert LedgerPage(total=25, page_size=10).page_count == 3
        assert LedgerPage(total=0, page_size=10).page_count == 1

    def test_navigation_flags(self) -> None:
        """Test previous and next flags."""
        page = LedgerPage(total=25, page=2, page_size=10)

        assert page.has_previous
        assert page.has_next
        assert not LedgerPage(total=25, page=3, page_size=10).has_next

    def test_clamp(self) -> None:
        """Test clamping below one and past the last page."""
        assert clamp_page(0, total=25, page_size=10) == 1
        assert clamp_page(4, total=25, page_size=10) == 3
        assert LedgerPage(total=25, page_size=10).clamp(2) == 2
