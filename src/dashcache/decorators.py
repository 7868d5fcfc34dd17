"""Cache decorators for fetchers and mutations.

``cached`` turns an async fetch function into a read through a given
ResourceCache; ``invalidates`` evicts resource prefixes after an async
mutation succeeds. Both take the cache explicitly, so separate caches
never share state.
"""

import functools
import inspect
import re
from collections.abc import Callable
from typing import Any, TypeVar, Union

from dashcache.core.entities.cache_config import ResourcePolicy
from dashcache.core.entities.cache_key import CacheKey, KeyLike
from dashcache.core.services.resource_cache import ResourceCache
from dashcache.utils.hashing import key_segment

F = TypeVar("F", bound=Callable[..., Any])

KeySpec = Union[str, tuple[Any, ...], Callable[..., KeyLike]]


def cached(
    cache: ResourceCache,
    key: KeySpec | None = None,
    policy: ResourcePolicy | None = None,
) -> Callable[[F], F]:
    """Decorator for reading an async fetcher through a cache.

    Args:
        cache: The resource cache to read through.
        key: Cache key, or key template. Strings and string segments of
            tuples support ``{arg_name}`` interpolation. A callable
            receives the call's arguments and returns the key. Defaults
            to the function's qualified name followed by its arguments,
            without ``self`` or ``cls``; arguments that are not
            primitives are hashed.
        policy: Optional staleness and retention windows.

    Returns:
        Decorated function.

    Example:
        @cached(cache, key=("/api/cashback/history", "{page}", "{limit}"))
        async def history(page: int, limit: int) -> LedgerPage:
            return await client.fetch_cashback_history(page, limit)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            cache_key = _build_cache_key(func, args, kwargs, key)
            return await cache.get(
                cache_key, lambda: func(*args, **kwargs), policy
            )

        return wrapper  # type: ignore

    return decorator


def invalidates(
    cache: ResourceCache,
    prefixes: list[KeySpec],
) -> Callable[[F], F]:
    """Decorator for evicting cache entries after a mutation.

    Executes the decorated function and, if it returns, evicts every
    entry whose key starts with one of ``prefixes``. Nothing is evicted
    when the function raises.

    Args:
        cache: The resource cache to evict from.
        prefixes: Key prefixes, with the same interpolation as ``cached``.

    Returns:
        Decorated function.

    Example:
        @invalidates(cache, prefixes=["/api/subscriptions"])
        async def cancel_subscription(id: int) -> None:
            await client.cancel(id)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            # Execute function first
            result = await func(*args, **kwargs)

            for prefix in prefixes:
                cache.invalidate_prefix(_resolve_key(func, args, kwargs, prefix))

            return result

        return wrapper  # type: ignore

    return decorator


def _build_cache_key(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    custom_key: KeySpec | None,
) -> CacheKey:
    """Build cache key for a function call.

    Args:
        func: The function being cached.
        args: Positional arguments.
        kwargs: Keyword arguments.
        custom_key: Custom key, key template or key builder function.

    Returns:
        The cache key.
    """
    if custom_key is not None:
        return _resolve_key(func, args, kwargs, custom_key)

    # Build default key from function module, name, and arguments
    name = f"{func.__module__}.{func.__qualname__}"
    if args and _is_method(func):
        args = args[1:]
    positional = [key_segment(v) for v in args]
    named = [f"{k}={key_segment(v)}" for k, v in sorted(kwargs.items())]
    return CacheKey(segments=(name, *positional, *named))


def _is_method(func: Callable[..., Any]) -> bool:
    try:
        parameters = list(inspect.signature(func).parameters)
    except (TypeError, ValueError):
        return False
    return bool(parameters) and parameters[0] in ("self", "cls")


def _resolve_key(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    spec: KeySpec,
) -> CacheKey:
    if callable(spec):
        return CacheKey.of(spec(*args, **kwargs))

    arguments = _bind_arguments(func, args, kwargs)
    if isinstance(spec, str):
        return CacheKey.of(_interpolate(spec, arguments))
    return CacheKey(segments=tuple(_interpolate(s, arguments) for s in spec))


def _bind_arguments(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    try:
        bound = inspect.signature(func).bind(*args, **kwargs)
    except TypeError:
        return dict(kwargs)
    bound.apply_defaults()
    return dict(bound.arguments)


_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _interpolate(segment: Any, arguments: dict[str, Any]) -> Any:
    """Interpolate ``{arg_name}`` placeholders in a key segment.

    A segment that is exactly one placeholder takes the argument value
    itself, so ``"{page}"`` stays an int, while a dict or list value is
    hashed. Non-string segments and unknown names are left unchanged.
    """
    if not isinstance(segment, str):
        return segment

    whole = _PLACEHOLDER.fullmatch(segment)
    if whole and whole.group(1) in arguments:
        return key_segment(arguments[whole.group(1)])

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in arguments:
            return str(arguments[name])
        return match.group(0)  # Keep original if not found

    return _PLACEHOLDER.sub(replacer, segment)
