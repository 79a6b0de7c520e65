"""Persistence adapters."""

from .memory_store import InMemoryStore, SimulatedStoreError
from .order_number_generator import (
    InMemoryOrderNumberGenerator,
    SqlAlchemyOrderNumberGenerator,
)

__all__ = [
    "InMemoryOrderNumberGenerator",
    "InMemoryStore",
    "SimulatedStoreError",
    "SqlAlchemyOrderNumberGenerator",
]
