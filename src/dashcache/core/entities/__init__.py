"""Domain entities for dashcache."""

from dashcache.core.entities.asset import AssetResolution, AssetStatus
from dashcache.core.entities.cache_config import CacheConfig, ResourcePolicy
from dashcache.core.entities.cache_entry import CacheEntry
from dashcache.core.entities.cache_key import CacheKey, KeyLike, user_segment
from dashcache.core.entities.client_config import ClientConfig
from dashcache.core.entities.ledger import LedgerPage, clamp_page, page_count
from dashcache.core.entities.metrics import DashboardSnapshot, DerivedMetrics
from dashcache.core.entities.records import (
    CashbackTransaction,
    PaymentPeriod,
    SubscriptionRecord,
    SubscriptionStatus,
)

__all__ = [
    "CacheEntry",
    "CacheKey",
    "KeyLike",
    "user_segment",
    "CacheConfig",
    "ResourcePolicy",
    "ClientConfig",
    "AssetResolution",
    "AssetStatus",
    "SubscriptionRecord",
    "SubscriptionStatus",
    "PaymentPeriod",
    "CashbackTransaction",
    "LedgerPage",
    "clamp_page",
    "page_count",
    "DerivedMetrics",
    "DashboardSnapshot",
]
