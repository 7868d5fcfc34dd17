"""Cache invalidator interface."""

from typing import Protocol


class IInvalidator(Protocol):
    """Contract for clearing user-scoped cache entries."""

    def evict_user(self, user_id: int | str | None) -> int:
        """Evict every entry belonging to a user.

        Args:
            user_id: The user whose data must no longer be served, or
                None to clear only the shared user-scoped resources.

        Returns:
            Number of entries evicted.
        """
        ...
