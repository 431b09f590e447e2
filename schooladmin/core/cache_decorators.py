# schooladmin/core/cache_decorators.py
"""Cache decorators for FastAPI endpoints."""
import functools
from typing import Callable
from .cache import cache_manager
from .config import settings

def cache_response(key_prefix: str, ttl: int = None):
    """Cache the JSON-ready return value of an endpoint.

    Path and query parameters become part of the key; the session is skipped.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            key_parts = [key_prefix]
            for key, value in sorted(kwargs.items()):
                if key not in ['request', 'db', 'session']:
                    key_parts.append(f"{key}:{value}")

            cache_key = cache_manager.make_key(*key_parts)

            cached_result = await cache_manager.get(cache_key)
            if cached_result is not None:
                return cached_result

            result = await func(*args, **kwargs)

            await cache_manager.set(cache_key, result, expire=ttl or settings.cache_ttl)
            return result

        return wrapper
    return decorator

def invalidate_cache_pattern(*patterns: str):
    """Invalidate cache patterns after the endpoint returns."""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            result = await func(*args, **kwargs)
            for pattern in patterns:
                await cache_manager.delete_pattern(pattern)
            return result
        return wrapper
    return decorator
