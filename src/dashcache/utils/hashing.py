"""Hashing utilities for cache key generation."""

import hashlib
import json
from typing import Any

from dashcache.core.entities.cache_key import KeySegment

_PRIMITIVES = (str, int, float, bool, type(None))


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Dicts hash the same whatever their insertion order. Values JSON
    cannot encode are hashed through ``str``.

    Args:
        value: The value to hash, usually a dict or list of filters.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    normalized = json.dumps(value, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def key_segment(value: Any) -> KeySegment:
    """Turn an argument into a cache key segment.

    Primitives are kept as they are; anything else becomes its hash.
    """
    if isinstance(value, _PRIMITIVES):
        return value
    return hash_value(value)
