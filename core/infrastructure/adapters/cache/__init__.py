"""Cache adapters."""

from .redis_cache import NullCacheInvalidator, RedisCacheInvalidator

__all__ = ["NullCacheInvalidator", "RedisCacheInvalidator"]
