"""Exceptions raised by dashcache."""

from typing import Any


class DashcacheError(Exception):
    """Base class for dashcache errors."""

    pass


class FetchFailure(DashcacheError):
    """Raised when a fetch fails and no cached value can be served.

    Every caller coalesced onto the failed fetch receives the same
    failure. Nothing is stored, so the next read fetches again.
    """

    def __init__(self, key: Any, cause: BaseException) -> None:
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to fetch {key}: {cause}")


class StaleServedWithBackgroundFailure(DashcacheError):
    """Recorded when a background refresh fails behind a stale value.

    Never raised into the read path: the stale value is served and
    this failure is logged and reported out of band.
    """

    def __init__(self, key: Any, cause: BaseException) -> None:
        self.key = key
        self.cause = cause
        super().__init__(f"Refresh of {key} failed, serving stale value: {cause}")


class LoadVerificationFailure(DashcacheError):
    """An asset could not be verified as loadable."""

    def __init__(self, locator: str, cause: BaseException | None = None) -> None:
        self.locator = locator
        self.cause = cause
        message = f"Failed to load asset {locator}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
