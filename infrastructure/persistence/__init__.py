"""
Persistence Abstraction Layer
=============================

Provides repository interfaces for marketplace entities with two backends:
an in-memory store and DynamoDB.
"""

from .factory import RepositoryFactory, RepositorySet
from .interface import (
    FavoriteRepository,
    OrderRepository,
    ProductRepository,
    RepositoryException,
    UserRepository,
)

__all__ = [
    "ProductRepository",
    "UserRepository",
    "OrderRepository",
    "FavoriteRepository",
    "RepositoryException",
    "RepositoryFactory",
    "RepositorySet",
]
