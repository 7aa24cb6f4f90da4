"""
Marketplace Service Layer

This package contains all business logic for the webshop, organized into
domain services on top of the repository interfaces in
``infrastructure.persistence``.

Services:
- ProductService: Product CRUD, search and detail views
- OrderService: Order placement with price snapshot
- FavoriteService: Per-user product favorites
- AuthService: Registration, login and account deletion cascade

Usage:
    from infrastructure.container import ServiceContainer

    container = ServiceContainer()
    result = container.product_service().create_product(...)

    if result.ok:
        product = result.value
    else:
        error = result.error
"""

from .auth_service import AuthService, AuthSession
from .base import (
    AddFavoriteError,
    AuthError,
    BaseService,
    CreateOrderError,
    CreateProductError,
    DeleteOrderError,
    DeleteProductError,
    DeleteUserError,
    GetProductError,
    RemoveFavoriteError,
    ServiceResult,
    UpdateProductError,
    service_err,
    service_ok,
)
from .favorite_service import FavoriteService
from .order_service import OrderService
from .product_service import ProductService

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    # Error sets
    "CreateProductError",
    "UpdateProductError",
    "DeleteProductError",
    "GetProductError",
    "CreateOrderError",
    "DeleteOrderError",
    "AddFavoriteError",
    "RemoveFavoriteError",
    "AuthError",
    "DeleteUserError",
    # Services
    "AuthService",
    "AuthSession",
    "FavoriteService",
    "OrderService",
    "ProductService",
]
