"""
Repository Factory
==================

Factory pattern for creating the set of repositories for the configured backend.
Implements the Dependency Inversion Principle: services only see the abstract
repository interfaces.
"""

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from django.conf import settings

from .dynamodb import (
    DynamoDbFavoriteRepository,
    DynamoDbOrderRepository,
    DynamoDbProductRepository,
    DynamoDbTables,
    DynamoDbUserRepository,
)
from .interface import FavoriteRepository, OrderRepository, ProductRepository, UserRepository
from .memory import (
    InMemoryFavoriteRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryStore,
    InMemoryUserRepository,
)

logger = logging.getLogger(__name__)

RepositoryBackend = Literal["memory", "dynamodb"]


@dataclass
class RepositorySet:
    """One repository per entity, all bound to the same backend."""

    products: ProductRepository
    users: UserRepository
    orders: OrderRepository
    favorites: FavoriteRepository
    backend: str


class RepositoryFactory:
    """
    Factory for creating repository sets.

    Usage:
        # In settings.py
        INFRASTRUCTURE = {"REPOSITORY_BACKEND": "memory"}  # or "dynamodb"

        # In your code
        repositories = RepositoryFactory.create()
    """

    @staticmethod
    def create(backend: Optional[RepositoryBackend] = None) -> RepositorySet:
        """
        Create repositories for a backend.

        Args:
            backend: 'memory' or 'dynamodb'
                    If None, reads INFRASTRUCTURE["REPOSITORY_BACKEND"] from settings

        Returns:
            RepositorySet bound to the selected backend

        Raises:
            ValueError: If backend type is invalid
        """
        backend_type = backend or getattr(settings, "INFRASTRUCTURE", {}).get("REPOSITORY_BACKEND", "memory")

        logger.info(f"Creating repository backend: {backend_type}")

        if backend_type == "memory":
            return RepositoryFactory.create_memory()
        elif backend_type == "dynamodb":
            return RepositoryFactory.create_dynamodb()
        else:
            raise ValueError(f"Invalid repository backend: {backend_type}. Must be 'memory' or 'dynamodb'")

    @staticmethod
    def create_memory(store: Optional[InMemoryStore] = None) -> RepositorySet:
        """
        Create in-memory repositories sharing one store.

        Args:
            store: Existing store to bind to (a new one is created if None)
        """
        store = store or InMemoryStore()
        return RepositorySet(
            products=InMemoryProductRepository(store),
            users=InMemoryUserRepository(store),
            orders=InMemoryOrderRepository(store),
            favorites=InMemoryFavoriteRepository(store),
            backend="memory",
        )

    @staticmethod
    def create_dynamodb(tables: Optional[DynamoDbTables] = None) -> RepositorySet:
        """
        Create DynamoDB repositories.

        Args:
            tables: Table resolver (built from settings if None)
        """
        tables = tables or DynamoDbTables()
        return RepositorySet(
            products=DynamoDbProductRepository(tables.products()),
            users=DynamoDbUserRepository(tables.users()),
            orders=DynamoDbOrderRepository(tables.orders()),
            favorites=DynamoDbFavoriteRepository(tables.favorites()),
            backend="dynamodb",
        )
