"""Domain services for dashcache."""

from dashcache.core.services.asset_cache import AssetCache
from dashcache.core.services.dashboard_stats import DashboardStats
from dashcache.core.services.invalidator import (
    USER_SCOPED_RESOURCES,
    UserCacheInvalidator,
    UserContext,
)
from dashcache.core.services.ledger_view import LedgerView
from dashcache.core.services.metrics_aggregator import (
    aggregate,
    end_of_month,
    monthly_cost,
    round_amount,
)
from dashcache.core.services.resource_cache import Fetcher, ResourceCache

__all__ = [
    "ResourceCache",
    "Fetcher",
    "AssetCache",
    "UserCacheInvalidator",
    "UserContext",
    "USER_SCOPED_RESOURCES",
    "LedgerView",
    "DashboardStats",
    # Metrics
    "aggregate",
    "monthly_cost",
    "end_of_month",
    "round_amount",
]
