"""Cache configuration entities."""

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass(frozen=True)
class ResourcePolicy:
    """Staleness and retention windows for one class of resource.

    Attributes:
        stale_after: Age after which a value is served only while a
            refresh runs.
        retain_until: Age after which a value is purged and never served.
    """

    stale_after: timedelta = timedelta(seconds=30)
    retain_until: timedelta = timedelta(minutes=5)

    def __post_init__(self) -> None:
        """Validate the windows."""
        if self.stale_after < timedelta(0):
            raise ValueError("stale_after must not be negative")
        if self.retain_until < self.stale_after:
            raise ValueError("retain_until must not be shorter than stale_after")


def _default_resource_policies() -> dict[str, ResourcePolicy]:
    return {
        "/api/subscriptions": ResourcePolicy(
            stale_after=timedelta(minutes=1),
            retain_until=timedelta(minutes=5),
        ),
        "/api/cashback/total": ResourcePolicy(
            stale_after=timedelta(seconds=30),
            retain_until=timedelta(minutes=3),
        ),
        "/api/cashback/balance": ResourcePolicy(
            stale_after=timedelta(seconds=30),
            retain_until=timedelta(minutes=3),
        ),
    }


@dataclass
class CacheConfig:
    """Cache configuration.

    Holds the default policies used by the resource cache, the
    per-resource overrides, and size limits for both caches.

    Policies are looked up by the first segment of a cache key (the
    resource path), falling back to ``default_policy``.
    """

    enabled: bool = True
    default_policy: ResourcePolicy = field(default_factory=ResourcePolicy)
    prefetch_policy: ResourcePolicy | None = None
    resource_policies: dict[str, ResourcePolicy] = field(
        default_factory=_default_resource_policies
    )
    max_size: int = 1000
    asset_maxsize: int = 1000

    def __post_init__(self) -> None:
        """Set the prefetch policy if not provided."""
        if self.prefetch_policy is None:
            self.prefetch_policy = ResourcePolicy(
                stale_after=timedelta(minutes=1),
                retain_until=max(
                    self.default_policy.retain_until, timedelta(minutes=1)
                ),
            )
        if self.max_size < 1 or self.asset_maxsize < 1:
            raise ValueError("cache sizes must be positive")

    def policy_for(self, resource: str) -> ResourcePolicy:
        """Get the policy for a resource path.

        Args:
            resource: The resource path (first key segment).

        Returns:
            The configured policy, or the default one.
        """
        return self.resource_policies.get(resource, self.default_policy)
