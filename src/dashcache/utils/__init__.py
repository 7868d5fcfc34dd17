"""Utility functions for dashcache."""

from dashcache.utils.hashing import hash_value, key_segment

__all__ = ["hash_value", "key_segment"]
