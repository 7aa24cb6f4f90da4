"""
In-Memory Repositories
======================

Concrete repository implementations backed by an InMemoryStore.

Reads take a snapshot of the table values before filtering so concurrent
writers never invalidate an iteration in progress.
"""

import logging
from typing import List, Optional

from marketplace.domain.models import Category, Favorite, Order, Product, User

from ..filtering import filter_products, newest_first_page
from ..interface import FavoriteRepository, OrderRepository, ProductRepository, UserRepository
from .store import InMemoryStore

logger = logging.getLogger(__name__)


class InMemoryProductRepository(ProductRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def save(self, product: Product) -> Product:
        self.store.products[product.id] = product
        return product

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return self.store.products.get(product_id)

    def find_all(self) -> List[Product]:
        return list(self.store.products.values())

    def find_by_owner_id(self, owner_id: str) -> List[Product]:
        return [product for product in self.find_all() if product.owner_id == owner_id]

    def search(
        self,
        query: Optional[str],
        category: Optional[Category],
        limit: int,
        offset: int,
    ) -> List[Product]:
        return newest_first_page(filter_products(self.find_all(), query, category), limit, offset)

    def count(self, query: Optional[str], category: Optional[Category]) -> int:
        return len(filter_products(self.find_all(), query, category))

    def delete_by_id(self, product_id: str) -> bool:
        return self.store.products.pop(product_id, None) is not None

    def delete_by_owner_id(self, owner_id: str) -> int:
        removed = 0
        for product in self.find_by_owner_id(owner_id):
            if self.delete_by_id(product.id):
                removed += 1
        logger.debug(f"Deleted {removed} products owned by {owner_id}")
        return removed


class InMemoryUserRepository(UserRepository):
    """User repository keeping the email index in step with the user table."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def save(self, user: User) -> User:
        email_key = user.email.lower()
        with self.store.user_lock:
            previous = self.store.users.get(user.id)
            if previous is not None and previous.email.lower() != email_key:
                self.store.email_index.pop(previous.email.lower(), None)
            self.store.users[user.id] = user
            self.store.email_index[email_key] = user.id
        return user

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.store.users.get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        with self.store.user_lock:
            user_id = self.store.email_index.get(email.lower())
            if user_id is None:
                return None
            return self.store.users.get(user_id)

    def exists_by_email(self, email: str) -> bool:
        return email.lower() in self.store.email_index

    def find_all(self) -> List[User]:
        return list(self.store.users.values())

    def delete_by_id(self, user_id: str) -> bool:
        with self.store.user_lock:
            user = self.store.users.pop(user_id, None)
            if user is None:
                return False
            email_key = user.email.lower()
            if self.store.email_index.get(email_key) == user_id:
                del self.store.email_index[email_key]
        return True


class InMemoryOrderRepository(OrderRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def save(self, order: Order) -> Order:
        self.store.orders[order.id] = order
        return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        return self.store.orders.get(order_id)

    def find_all(self) -> List[Order]:
        return list(self.store.orders.values())

    def find_by_user_id(self, user_id: str) -> List[Order]:
        return [order for order in self.find_all() if order.user_id == user_id]

    def delete_by_id(self, order_id: str) -> bool:
        return self.store.orders.pop(order_id, None) is not None


class InMemoryFavoriteRepository(FavoriteRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def save(self, favorite: Favorite) -> Favorite:
        self.store.favorites[favorite.id] = favorite
        return favorite

    def find_by_id(self, favorite_id: str) -> Optional[Favorite]:
        return self.store.favorites.get(favorite_id)

    def find_by_user_id(self, user_id: str) -> List[Favorite]:
        return [favorite for favorite in self.store.favorites.copy().values() if favorite.user_id == user_id]

    def find_by_user_id_and_product_id(self, user_id: str, product_id: str) -> Optional[Favorite]:
        for favorite in self.find_by_user_id(user_id):
            if favorite.product_id == product_id:
                return favorite
        return None

    def delete_by_id(self, favorite_id: str) -> bool:
        return self.store.favorites.pop(favorite_id, None) is not None

    def delete_by_user_id_and_product_id(self, user_id: str, product_id: str) -> bool:
        favorite = self.find_by_user_id_and_product_id(user_id, product_id)
        if favorite is None:
            return False
        return self.delete_by_id(favorite.id)

    def delete_by_product_id(self, product_id: str) -> int:
        matching = [favorite.id for favorite in self.store.favorites.copy().values() if favorite.product_id == product_id]
        return sum(1 for favorite_id in matching if self.delete_by_id(favorite_id))
