"""Asset loaders."""

from dashcache.infrastructure.loaders.http import HttpAssetLoader

__all__ = ["HttpAssetLoader"]
