"""
Repository Interfaces
=====================

Abstract base classes defining the persistence contract for each marketplace entity.

Every backend (in-memory, DynamoDB) implements the same contract:
    - save() is an upsert by id with last-write-wins semantics
    - find_by_id() after save() returns the value just saved
    - delete_by_id() returns False for missing ids instead of raising

Storage faults are raised as RepositoryException and are never retried here.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from marketplace.domain.models import Category, Favorite, Order, Product, User


class RepositoryException(Exception):
    """Base exception for storage backend failures."""

    pass


class ProductRepository(ABC):
    """
    Abstract interface for product persistence.

    Concrete implementations:
        - InMemoryProductRepository: process-local store
        - DynamoDbProductRepository: DynamoDB table with owner-index
    """

    @abstractmethod
    def save(self, product: Product) -> Product:
        """
        Insert or replace a product by id.

        Args:
            product: Product to persist

        Returns:
            The persisted product

        Raises:
            RepositoryException: If the backend fails
        """
        pass

    @abstractmethod
    def find_by_id(self, product_id: str) -> Optional[Product]:
        pass

    @abstractmethod
    def find_all(self) -> List[Product]:
        """Return every product, in no particular order."""
        pass

    @abstractmethod
    def find_by_owner_id(self, owner_id: str) -> List[Product]:
        pass

    @abstractmethod
    def search(
        self,
        query: Optional[str],
        category: Optional[Category],
        limit: int,
        offset: int,
    ) -> List[Product]:
        """
        Search products by text and category.

        Matching is a case-insensitive substring test against name and
        description plus an exact category match. Results are ordered newest
        first and sliced to ``[offset, offset + limit)``.

        Args:
            query: Text to look for; None or blank matches every product
            category: Category to restrict to, or None for all
            limit: Maximum number of products to return
            offset: Number of matching products to skip

        Returns:
            List of matching products (empty when offset is past the end)
        """
        pass

    @abstractmethod
    def count(self, query: Optional[str], category: Optional[Category]) -> int:
        """Count products matched by ``search`` with the same filters."""
        pass

    @abstractmethod
    def delete_by_id(self, product_id: str) -> bool:
        """
        Delete a product.

        Returns:
            True if a product was removed, False if none existed
        """
        pass

    @abstractmethod
    def delete_by_owner_id(self, owner_id: str) -> int:
        """
        Delete every product owned by a user.

        Not atomic: products saved concurrently may survive.

        Returns:
            Number of products removed
        """
        pass


class UserRepository(ABC):
    """Abstract interface for user persistence. Email lookups ignore case."""

    @abstractmethod
    def save(self, user: User) -> User:
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    def find_all(self) -> List[User]:
        pass

    @abstractmethod
    def delete_by_id(self, user_id: str) -> bool:
        pass


class OrderRepository(ABC):
    """Abstract interface for order persistence."""

    @abstractmethod
    def save(self, order: Order) -> Order:
        pass

    @abstractmethod
    def find_by_id(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    def find_all(self) -> List[Order]:
        pass

    @abstractmethod
    def find_by_user_id(self, user_id: str) -> List[Order]:
        pass

    @abstractmethod
    def delete_by_id(self, order_id: str) -> bool:
        pass


class FavoriteRepository(ABC):
    """
    Abstract interface for favorite persistence.

    Uniqueness of (user_id, product_id) is not enforced here; callers check
    with find_by_user_id_and_product_id() before saving.
    """

    @abstractmethod
    def save(self, favorite: Favorite) -> Favorite:
        pass

    @abstractmethod
    def find_by_id(self, favorite_id: str) -> Optional[Favorite]:
        pass

    @abstractmethod
    def find_by_user_id(self, user_id: str) -> List[Favorite]:
        pass

    @abstractmethod
    def find_by_user_id_and_product_id(self, user_id: str, product_id: str) -> Optional[Favorite]:
        pass

    @abstractmethod
    def delete_by_id(self, favorite_id: str) -> bool:
        pass

    @abstractmethod
    def delete_by_user_id_and_product_id(self, user_id: str, product_id: str) -> bool:
        pass

    @abstractmethod
    def delete_by_product_id(self, product_id: str) -> int:
        """
        Delete every favorite referencing a product.

        Returns:
            Number of favorites removed (zero is not an error)
        """
        pass
