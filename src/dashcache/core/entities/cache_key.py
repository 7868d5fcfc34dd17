"""Cache key value object."""

from dataclasses import dataclass
from typing import Union

KeySegment = Union[str, int, float, bool, None]
KeyLike = Union["CacheKey", str, tuple[KeySegment, ...], list[KeySegment]]

_SEGMENT_TYPES = (str, int, float, bool, type(None))


@dataclass(frozen=True)
class CacheKey:
    """Immutable cache key value object.

    An ordered tuple of primitive segments. The first segment names the
    resource (usually an API path); the rest scope it, e.g. page numbers
    or a ``user:<id>`` marker.
    """

    segments: tuple[KeySegment, ...]

    def __post_init__(self) -> None:
        """Validate segments."""
        if not self.segments:
            raise ValueError("cache key must have at least one segment")
        for segment in self.segments:
            if not isinstance(segment, _SEGMENT_TYPES):
                raise TypeError(
                    f"cache key segment of type {type(segment).__name__} "
                    "is not a primitive"
                )

    def __str__(self) -> str:
        """Return the key as a colon-joined string."""
        return ":".join("" if s is None else str(s) for s in self.segments)

    @property
    def resource(self) -> str:
        """Get the resource segment as a string."""
        return str(self.segments[0])

    def startswith(self, prefix: "KeyLike") -> bool:
        """Check whether this key begins with the segments of ``prefix``.

        Args:
            prefix: A key or segments to compare against.

        Returns:
            True if every prefix segment matches the leading segments.
        """
        other = CacheKey.of(prefix).segments
        return self.segments[: len(other)] == other

    def references_user(self, user_id: int | str) -> bool:
        """Check whether any segment is exactly ``user:<user_id>``."""
        marker = user_segment(user_id)
        return any(segment == marker for segment in self.segments)

    @classmethod
    def of(cls, key: KeyLike) -> "CacheKey":
        """Normalize a string, tuple, list or key into a CacheKey.

        Args:
            key: The raw key.

        Returns:
            A CacheKey instance.
        """
        if isinstance(key, CacheKey):
            return key
        if isinstance(key, str):
            return cls(segments=(key,))
        return cls(segments=tuple(key))


def user_segment(user_id: int | str) -> str:
    """Build the key segment that scopes a resource to a user."""
    return f"user:{user_id}"
