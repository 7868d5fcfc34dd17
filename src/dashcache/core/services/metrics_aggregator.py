"""Metrics aggregator - derives dashboard numbers from raw records.

Everything here is a pure function of its inputs. ``today`` defaults to
the date at call time, so expiry windows roll over at midnight and at
month end without any cached state.
"""

import calendar
from collections.abc import Iterable
from datetime import date
from decimal import ROUND_FLOOR, Decimal

from dashcache.core.entities.metrics import DerivedMetrics
from dashcache.core.entities.records import PaymentPeriod, SubscriptionRecord

# Months covered by one payment. Missing or unknown periods bill monthly.
PERIOD_MONTHS: dict[PaymentPeriod, int] = {
    PaymentPeriod.MONTHLY: 1,
    PaymentPeriod.QUARTERLY: 3,
    PaymentPeriod.YEARLY: 12,
}

_HALF = Decimal("0.5")


def round_amount(value: Decimal) -> Decimal:
    """Round to whole units, halves towards positive infinity."""
    return (value + _HALF).to_integral_value(rounding=ROUND_FLOOR)


def end_of_month(today: date) -> date:
    """Last calendar day of the month containing ``today``."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=last_day)


def monthly_cost(subscription: SubscriptionRecord) -> Decimal:
    """Normalize a subscription's payment to a monthly cost.

    Args:
        subscription: The subscription record.

    Returns:
        The unrounded monthly cost.
    """
    months = PERIOD_MONTHS.get(subscription.payment_period, 1)  # type: ignore[arg-type]
    return subscription.payment_amount / months


def is_expiring_soon(subscription: SubscriptionRecord, today: date) -> bool:
    """Check if the paid period ends between today and month end, inclusive."""
    if subscription.paid_until is None:
        return False
    return today <= subscription.paid_until <= end_of_month(today)


def aggregate(
    subscriptions: Iterable[SubscriptionRecord],
    total_cashback: Decimal,
    balance: Decimal,
    today: date | None = None,
) -> DerivedMetrics:
    """Compute the dashboard metrics.

    Monetary values are rounded only here; the inputs keep full
    precision.

    Args:
        subscriptions: The user's subscriptions.
        total_cashback: Total cashback credited, unrounded.
        balance: Current cashback balance, unrounded.
        today: Reference date. Defaults to the current date.

    Returns:
        The derived metrics.
    """
    records = list(subscriptions)
    reference = today or date.today()

    active = [record for record in records if record.is_active]
    monthly_total = sum((monthly_cost(record) for record in active), Decimal(0))

    return DerivedMetrics(
        total_subscriptions=len(records),
        active_subscriptions=len(active),
        expiring_soon=sum(1 for record in records if is_expiring_soon(record, reference)),
        monthly_total=round_amount(monthly_total),
        total_cashback=round_amount(total_cashback),
        current_balance=round_amount(balance),
    )
