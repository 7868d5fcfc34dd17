"""Derived dashboard metrics."""

from dataclasses import dataclass, field
from decimal import Decimal

from dashcache.core.entities.records import SubscriptionRecord


@dataclass(frozen=True)
class DerivedMetrics:
    """Numbers shown on the dashboard cards.

    Computed from raw records on every read and never cached. Monetary
    values are rounded to whole units.
    """

    total_subscriptions: int = 0
    active_subscriptions: int = 0
    expiring_soon: int = 0
    monthly_total: Decimal = Decimal(0)
    total_cashback: Decimal = Decimal(0)
    current_balance: Decimal = Decimal(0)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Metrics together with the subscriptions they were derived from."""

    metrics: DerivedMetrics
    subscriptions: tuple[SubscriptionRecord, ...] = field(default_factory=tuple)
