"""Core domain layer for dashcache."""

from dashcache.core.entities import (
    CacheConfig,
    CacheEntry,
    CacheKey,
    DerivedMetrics,
    ResourcePolicy,
)
from dashcache.core.interfaces import (
    IAssetLoader,
    IDashboardSource,
    IInvalidator,
    IKeyBuilder,
)
from dashcache.core.services import (
    AssetCache,
    DashboardStats,
    LedgerView,
    ResourceCache,
    UserCacheInvalidator,
    aggregate,
)

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "CacheKey",
    "ResourcePolicy",
    "DerivedMetrics",
    # Interfaces
    "IAssetLoader",
    "IDashboardSource",
    "IInvalidator",
    "IKeyBuilder",
    # Services
    "ResourceCache",
    "AssetCache",
    "UserCacheInvalidator",
    "LedgerView",
    "DashboardStats",
    "aggregate",
]
