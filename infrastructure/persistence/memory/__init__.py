"""
In-memory persistence backend.
"""

from .repositories import (
    InMemoryFavoriteRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)
from .store import InMemoryStore

__all__ = [
    "InMemoryStore",
    "InMemoryProductRepository",
    "InMemoryUserRepository",
    "InMemoryOrderRepository",
    "InMemoryFavoriteRepository",
]
