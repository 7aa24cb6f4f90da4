"""
In-Memory Store
===============

Process-local storage backing the in-memory repositories.

The store is an explicit object: the service container builds one at startup
and hands the same instance to every in-memory repository. Tests build their
own store per test case.
"""

import logging
import threading
from typing import Dict

from marketplace.domain.models import Favorite, Order, Product, User

logger = logging.getLogger(__name__)


class InMemoryStore:
    """
    Holds one table per entity plus the lowercased email -> user id index.

    Single-key reads and writes are plain dict operations, which are atomic
    in CPython. Writes that must keep ``users`` and ``email_index`` in step
    take ``user_lock`` so no call observes one updated without the other.
    """

    def __init__(self):
        self.products: Dict[str, Product] = {}
        self.users: Dict[str, User] = {}
        self.orders: Dict[str, Order] = {}
        self.favorites: Dict[str, Favorite] = {}
        self.email_index: Dict[str, str] = {}
        self.user_lock = threading.RLock()
        logger.info("In-memory store initialized")

    def clear(self):
        """Drop every record (useful between tests)."""
        with self.user_lock:
            self.products.clear()
            self.users.clear()
            self.orders.clear()
            self.favorites.clear()
            self.email_index.clear()
        logger.info("In-memory store cleared")

    def stats(self) -> Dict[str, int]:
        """Return the number of records per table."""
        return {
            "products": len(self.products),
            "users": len(self.users),
            "orders": len(self.orders),
            "favorites": len(self.favorites),
        }
