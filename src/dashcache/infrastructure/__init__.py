"""Infrastructure layer implementations for dashcache."""

from dashcache.infrastructure.http import ApiError, DashboardApiClient
from dashcache.infrastructure.key_builders import DefaultKeyBuilder
from dashcache.infrastructure.loaders import HttpAssetLoader

__all__ = [
    "ApiError",
    "DashboardApiClient",
    "DefaultKeyBuilder",
    "HttpAssetLoader",
]
