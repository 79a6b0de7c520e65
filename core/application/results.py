"""
Fire-and-log side effects.

Cache invalidation, status history writes and customer merges must never
fail the primary operation. They return a SideEffectResult that the caller
is free to ignore; the failure has already been logged.
"""
from dataclasses import dataclass
import logging
from typing import Any, Awaitable, Callable, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SideEffectResult:
    """Outcome of a best-effort operation."""
    operation: str
    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls, operation: str) -> "SideEffectResult":
        return cls(operation=operation, ok=True)

    @classmethod
    def failure(cls, operation: str, error: BaseException) -> "SideEffectResult":
        return cls(operation=operation, ok=False, error=f"{type(error).__name__}: {error}")


async def fire_and_log(
    operation: str,
    action: Callable[[], Awaitable[Any]],
    level: int = logging.ERROR,
) -> SideEffectResult:
    """
    Run a best-effort coroutine.

    Args:
        operation: Short name used in logs and in the result
        action: Zero-argument coroutine factory
        level: Log level used when the action fails

    Returns:
        SideEffectResult, never raises for ordinary exceptions
    """
    try:
        await action()
    except Exception as e:
        logger.log(level, f"{operation} failed: {e}", exc_info=True)
        return SideEffectResult.failure(operation, e)
    return SideEffectResult.success(operation)
