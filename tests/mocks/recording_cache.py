"""Cache invalidator that records keys instead of talking to Redis."""
from typing import List

from core.application.interfaces import ICacheInvalidator
from core.application.results import SideEffectResult


class RecordingCacheInvalidator(ICacheInvalidator):
    """Records invalidated keys; optionally fails like an unreachable cache."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.invalidated: List[str] = []

    async def invalidate(self, key: str) -> SideEffectResult:
        operation = f"cache invalidation ({key})"
        if self.fail:
            return SideEffectResult.failure(operation, ConnectionError("cache unavailable"))
        self.invalidated.append(key)
        return SideEffectResult.success(operation)
