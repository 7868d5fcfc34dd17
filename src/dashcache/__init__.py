"""dashcache - read-through caching and metrics for subscription dashboards.

A Python library for the client side of a subscription and cashback
dashboard: a read-through resource cache with staleness and retention
windows and request coalescing, a verified asset cache for service
icons, user-scoped invalidation, paginated ledger reads, and the
derived metrics shown on the dashboard cards.

Example:
    from dashcache import (
        CacheConfig,
        DashboardApiClient,
        DashboardStats,
        DefaultKeyBuilder,
        ResourceCache,
        UserCacheInvalidator,
        UserContext,
    )

    cache = ResourceCache(config=CacheConfig())
    client = DashboardApiClient()
    stats = DashboardStats(cache, client, DefaultKeyBuilder())

    snapshot = await stats.load()
    print(snapshot.metrics.monthly_total)

    # On login swap or logout
    session = UserContext(UserCacheInvalidator(cache), user_id=1)
    session.switch(2)

Icons:
    from dashcache import AssetCache, AssetStatus, HttpAssetLoader

    icons = AssetCache(HttpAssetLoader())
    resolution = icons.resolve("https://cdn.example.com/netflix.png")
    if resolution.status is AssetStatus.LOADING:
        resolution = await icons.load("https://cdn.example.com/netflix.png")
"""

from dashcache.core.entities import (
    AssetResolution,
    AssetStatus,
    CacheConfig,
    CacheEntry,
    CacheKey,
    CashbackTransaction,
    ClientConfig,
    DashboardSnapshot,
    DerivedMetrics,
    LedgerPage,
    PaymentPeriod,
    ResourcePolicy,
    SubscriptionRecord,
    SubscriptionStatus,
    clamp_page,
)
from dashcache.core.errors import (
    DashcacheError,
    FetchFailure,
    LoadVerificationFailure,
    StaleServedWithBackgroundFailure,
)
from dashcache.core.interfaces import (
    IAssetLoader,
    IDashboardSource,
    IInvalidator,
    IKeyBuilder,
)
from dashcache.core.services import (
    USER_SCOPED_RESOURCES,
    AssetCache,
    DashboardStats,
    LedgerView,
    ResourceCache,
    UserCacheInvalidator,
    UserContext,
    aggregate,
)
from dashcache.decorators import cached, invalidates
from dashcache.infrastructure import (
    ApiError,
    DashboardApiClient,
    DefaultKeyBuilder,
    HttpAssetLoader,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "ResourcePolicy",
    "ClientConfig",
    "CacheEntry",
    "CacheKey",
    "AssetResolution",
    "AssetStatus",
    # Records and metrics
    "SubscriptionRecord",
    "SubscriptionStatus",
    "PaymentPeriod",
    "CashbackTransaction",
    "LedgerPage",
    "clamp_page",
    "DerivedMetrics",
    "DashboardSnapshot",
    # Errors
    "DashcacheError",
    "FetchFailure",
    "StaleServedWithBackgroundFailure",
    "LoadVerificationFailure",
    # Core interfaces
    "IAssetLoader",
    "IDashboardSource",
    "IInvalidator",
    "IKeyBuilder",
    # Core services
    "ResourceCache",
    "AssetCache",
    "UserCacheInvalidator",
    "UserContext",
    "USER_SCOPED_RESOURCES",
    "LedgerView",
    "DashboardStats",
    "aggregate",
    # Infrastructure implementations
    "DashboardApiClient",
    "ApiError",
    "DefaultKeyBuilder",
    "HttpAssetLoader",
    # Decorators
    "cached",
    "invalidates",
]
