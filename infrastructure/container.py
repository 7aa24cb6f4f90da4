"""
Dependency Injection Container
================================

Wires repositories, security collaborators and domain services for one process.

The container is built once at process start and passed to whatever serves
requests. The repository backend is chosen when the repositories are first
built and stays bound for the container's lifetime.

Usage:
    from infrastructure.container import ServiceContainer

    container = ServiceContainer()            # backend from settings
    products = container.product_service()
    result = products.create_product(...)
"""

import logging
from typing import Optional

from .persistence import RepositoryFactory, RepositorySet
from .security import DjangoPasswordHasher, JWTTokenIssuer, PasswordHasherInterface, TokenIssuerInterface

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for marketplace dependencies.

    Implements lazy initialization and caching of service instances. Each
    container owns its own repositories, so two containers never share an
    in-memory store.

    Args:
        backend: Repository backend ('memory' or 'dynamodb')
                If None, uses INFRASTRUCTURE["REPOSITORY_BACKEND"] from settings
        repositories: Pre-built repositories (skips the factory)
    """

    def __init__(self, backend: Optional[str] = None, repositories: Optional[RepositorySet] = None):
        self._backend = backend
        self._repositories: Optional[RepositorySet] = repositories
        self._password_hasher: Optional[PasswordHasherInterface] = None
        self._token_issuer: Optional[TokenIssuerInterface] = None

        # Domain Services
        self._product_service = None
        self._order_service = None
        self._favorite_service = None
        self._auth_service = None

        logger.info("Service container initialized")

    def repositories(self) -> RepositorySet:
        """
        Get the repository set for the configured backend.

        Returns:
            RepositorySet (cached)
        """
        if self._repositories is None:
            self._repositories = RepositoryFactory.create(self._backend)
            logger.debug(f"Created repositories: backend={self._repositories.backend}")

        return self._repositories

    def password_hasher(self) -> PasswordHasherInterface:
        if self._password_hasher is None:
            self._password_hasher = DjangoPasswordHasher()
        return self._password_hasher

    def token_issuer(self) -> TokenIssuerInterface:
        if self._token_issuer is None:
            self._token_issuer = JWTTokenIssuer()
        return self._token_issuer

    def product_service(self):
        """Get ProductService instance."""
        if self._product_service is None:
            from marketplace.services import ProductService

            repositories = self.repositories()
            self._product_service = ProductService(
                products=repositories.products,
                users=repositories.users,
                favorites=repositories.favorites,
            )
            logger.debug("Created ProductService")
        return self._product_service

    def order_service(self):
        """Get OrderService instance."""
        if self._order_service is None:
            from marketplace.services import OrderService

            repositories = self.repositories()
            self._order_service = OrderService(orders=repositories.orders, products=repositories.products)
            logger.debug("Created OrderService")
        return self._order_service

    def favorite_service(self):
        """Get FavoriteService instance."""
        if self._favorite_service is None:
            from marketplace.services import FavoriteService

            repositories = self.repositories()
            self._favorite_service = FavoriteService(
                favorites=repositories.favorites, products=repositories.products
            )
            logger.debug("Created FavoriteService")
        return self._favorite_service

    def auth_service(self):
        """Get AuthService instance."""
        if self._auth_service is None:
            from marketplace.services import AuthService

            # AuthService depends on ProductService and FavoriteService for the deletion cascade
            self._auth_service = AuthService(
                users=self.repositories().users,
                password_hasher=self.password_hasher(),
                token_issuer=self.token_issuer(),
                product_service=self.product_service(),
                favorite_service=self.favorite_service(),
            )
            logger.debug("Created AuthService")
        return self._auth_service
