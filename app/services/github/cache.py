"""
TTL caching for GitHub API responses.

Repository trees are the only cached resource. Branch discovery during an
org search probes the same repository several times, and a repeated scan of
the same ref within a few minutes sees the same tree anyway.
"""

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from cachetools import TTLCache  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

_tree_cache: TTLCache[tuple[Any, ...], Any] = TTLCache(maxsize=100, ttl=300)  # 5 min


def _make_cache_key(
    func_name: str, args: tuple[Any, ...], kwargs: dict[str, Any]
) -> tuple[Any, ...]:
    """(name, owner, repo, branch, ...) with the bound instance dropped."""
    return (func_name, *args[1:], *sorted(kwargs.items()))


def cached_github_call(
    cache: TTLCache[tuple[Any, ...], Any],
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for caching async GitHub API calls.

    Only successful results are stored: a failed branch probe raises before
    the cache is touched, so the next probe of that branch hits the API again.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            key = _make_cache_key(func.__name__, args, kwargs)

            if key in cache:
                logger.debug(f"Cache HIT: {func.__name__}")
                cached_result: T = cache[key]
                return cached_result

            logger.debug(f"Cache MISS: {func.__name__}")
            result = await func(*args, **kwargs)
            cache[key] = result
            return result

        return wrapper

    return decorator


def clear_all_caches() -> None:
    """Clear all GitHub caches. Useful for testing or when data is known to be stale."""
    _tree_cache.clear()
    logger.debug("Cleared GitHub caches")


def get_cache_stats() -> dict[str, dict[str, int]]:
    """Get current cache statistics for monitoring."""
    return {
        "tree": {"size": len(_tree_cache), "maxsize": _tree_cache.maxsize},
    }


tree_cache = _tree_cache
