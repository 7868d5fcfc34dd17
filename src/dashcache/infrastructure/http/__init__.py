"""HTTP clients."""

from dashcache.infrastructure.http.client import ApiError, DashboardApiClient

__all__ = ["ApiError", "DashboardApiClient"]
