"""Core interfaces (Protocol classes) for dashcache."""

from dashcache.core.interfaces.asset_loader import IAssetLoader
from dashcache.core.interfaces.data_source import IDashboardSource
from dashcache.core.interfaces.invalidator import IInvalidator
from dashcache.core.interfaces.key_builder import IKeyBuilder

__all__ = [
    "IAssetLoader",
    "IDashboardSource",
    "IInvalidator",
    "IKeyBuilder",
]
