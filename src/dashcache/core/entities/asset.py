"""Asset resolution entities."""

from dataclasses import dataclass
from enum import Enum

from dashcache.core.errors import LoadVerificationFailure


class AssetStatus(Enum):
    """State of an asset lookup.

    LOADING: Verification is in flight; render a placeholder.
    READY: The handle (if any) can be rendered.
    ERROR: Verification failed; render a fallback.
    """

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class AssetResolution:
    """Result of resolving a locator against the asset cache."""

    status: AssetStatus
    handle: str | None = None
    error: LoadVerificationFailure | None = None

    @property
    def is_ready(self) -> bool:
        return self.status is AssetStatus.READY

    @classmethod
    def ready(cls, handle: str | None) -> "AssetResolution":
        return cls(status=AssetStatus.READY, handle=handle)

    @classmethod
    def loading(cls) -> "AssetResolution":
        return cls(status=AssetStatus.LOADING)

    @classmethod
    def failed(cls, error: LoadVerificationFailure) -> "AssetResolution":
        return cls(status=AssetStatus.ERROR, error=error)
