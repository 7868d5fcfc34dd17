"""API client configuration entity."""

from dataclasses import dataclass
from typing import Literal

UnauthorizedBehavior = Literal["raise", "return_none"]


@dataclass
class ClientConfig:
    """Configuration for the dashboard API client.

    ``on_unauthorized`` controls 401 handling: ``"raise"`` surfaces the
    error, ``"return_none"`` answers with empty data so the caller can
    redirect to login instead of retrying.
    """

    base_url: str = "http://localhost:5000"
    timeout: float = 10.0
    retries: int = 1
    retry_delay: float = 1.0
    on_unauthorized: UnauthorizedBehavior = "raise"

    def __post_init__(self) -> None:
        """Normalize and validate settings."""
        self.base_url = self.base_url.rstrip("/")
        if self.retries < 0:
            raise ValueError("retries must not be negative")
        if self.on_unauthorized not in ("raise", "return_none"):
            raise ValueError(f"unknown on_unauthorized: {self.on_unauthorized!r}")
