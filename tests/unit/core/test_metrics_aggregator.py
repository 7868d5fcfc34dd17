"""Tests for the metrics aggregator."""

from datetime import date, timedelta
from decimal import Decimal

from dashcache import (
    PaymentPeriod,
    SubscriptionRecord,
    SubscriptionStatus,
    aggregate,
)
from dashcache.core.services.metrics_aggregator import (
    end_of_month,
    monthly_cost,
    round_amount,
)


def subscription(
    id: int = 1,
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    amount: str = "0",
    period: PaymentPeriod | None = PaymentPeriod.MONTHLY,
    paid_until: date | None = None,
) -> SubscriptionRecord:
    return SubscriptionRecord(
        id=id,
        status=status,
        payment_amount=Decimal(amount),
        payment_period=period,
        paid_until=paid_until,
    )


class TestAggregate:
    """Tests for aggregate."""

    def test_dashboard_scenario(self, today: date) -> None:
        """Test the yearly, quarterly and canceled mix."""
        subscriptions = [
            subscription(1, amount="1200", period=PaymentPeriod.YEARLY),
            subscription(2, amount="300", period=PaymentPeriod.QUARTERLY),
            subscription(
                3,
                status=SubscriptionStatus.CANCELED,
                amount="500",
                period=PaymentPeriod.MONTHLY,
            ),
        ]

        metrics = aggregate(
            subscriptions, Decimal("1500.7"), Decimal("320.4"), today=today
        )

        assert metrics.total_subscriptions == 3
        assert metrics.active_subscriptions == 2
        assert metrics.monthly_total == 200
        assert metrics.total_cashback == 1501
        assert metrics.current_balance == 320

    def test_pure_and_idempotent(self, today: date) -> None:
        """Test identical inputs give identical metrics."""
        subscriptions = (subscription(1, amount="99.99"),)

        first = aggregate(subscriptions, Decimal("1"), Decimal("2"), today=today)
        second = aggregate(subscriptions, Decimal("1"), Decimal("2"), today=today)

        assert first == second

    def test_empty_inputs(self, today: date) -> None:
        """Test no subscriptions and zero cashback."""
        metrics = aggregate([], Decimal(0), Decimal(0), today=today)

        assert metrics.total_subscriptions == 0
        assert metrics.monthly_total == 0

    def test_only_active_subscriptions_cost(self, today: date) -> None:
        """Test pending and expired amounts are ignored."""
        metrics = aggregate(
            [
                subscription(1, status=SubscriptionStatus.PENDING, amount="50"),
                subscription(2, status=SubscriptionStatus.EXPIRED, amount="70"),
                subscription(3, amount="10"),
            ],
            Decimal(0),
            Decimal(0),
            today=today,
        )

        assert metrics.active_subscriptions == 1
        assert metrics.monthly_total == 10

    def test_rounding_only_at_the_boundary(self, today: date) -> None:
        """Test thirds are summed unrounded and rounded once."""
        metrics = aggregate(
            [
                subscription(1, amount="100", period=PaymentPeriod.QUARTERLY),
                subscription(2, amount="100", period=PaymentPeriod.QUARTERLY),
                subscription(3, amount="100", period=PaymentPeriod.QUARTERLY),
            ],
            Decimal(0),
            Decimal(0),
            today=today,
        )

        assert metrics.monthly_total == 100


class TestExpiringSoon:
    """Tests for the end-of-month expiry window."""

    def test_last_day_of_month_counts(self, today: date) -> None:
        """Test paid_until on the last day of the month is included."""
        last_day = end_of_month(today)
        metrics = aggregate(
            [
                subscription(1, paid_until=last_day),
                subscription(2, paid_until=last_day + timedelta(days=1)),
            ],
            Decimal(0),
            Decimal(0),
            today=today,
        )

        assert metrics.expiring_soon == 1

    def test_today_counts_and_past_does_not(self, today: date) -> None:
        """Test the window starts today, inclusive."""
        metrics = aggregate(
            [
                subscription(1, paid_until=today),
                subscription(2, paid_until=today - timedelta(days=1)),
                subscription(3, paid_until=None),
            ],
            Decimal(0),
            Decimal(0),
            today=today,
        )

        assert metrics.expiring_soon == 1

    def test_status_does_not_matter(self, today: date) -> None:
        """Test any subscription with a paid_until in the window counts."""
        metrics = aggregate(
            [subscription(1, status=SubscriptionStatus.PENDING, paid_until=today)],
            Decimal(0),
            Decimal(0),
            today=today,
        )

        assert metrics.expiring_soon == 1

    def test_end_of_month(self) -> None:
        """Test month lengths including leap February."""
        assert end_of_month(date(2028, 2, 10)) == date(2028, 2, 29)
        assert end_of_month(date(2026, 12, 31)) == date(2026, 12, 31)


class TestMonthlyCost:
    """Tests for period normalization."""

    def test_periods(self) -> None:
        """Test yearly, quarterly and monthly normalization."""
        assert monthly_cost(subscription(amount="120", period=PaymentPeriod.YEARLY)) == 10
        assert monthly_cost(subscription(amount="30", period=PaymentPeriod.QUARTERLY)) == 10
        assert monthly_cost(subscription(amount="10", period=PaymentPeriod.MONTHLY)) == 10

    def test_unknown_period_is_monthly(self) -> None:
        """Test a missing period falls back to monthly."""
        assert monthly_cost(subscription(amount="10", period=None)) == 10


class TestRoundAmount:
    """Tests for monetary rounding."""

    def test_halves_round_up(self) -> None:
        """Test halves go towards positive infinity."""
        assert round_amount(Decimal("2.5")) == 3
        assert round_amount(Decimal("-2.5")) == -2
        assert round_amount(Decimal("-2.6")) == -3
        assert round_amount(Decimal("320.4")) == 320
