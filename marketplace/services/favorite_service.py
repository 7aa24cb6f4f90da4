"""
FavoriteService - Product favorites

Lets users mark products as favorites, at most once per (user, product) pair.
"""

from typing import List

from infrastructure.persistence import FavoriteRepository, ProductRepository
from marketplace.domain.models import Favorite
from marketplace.infra.observability.metrics import favorites_added_total

from .base import AddFavoriteError, BaseService, RemoveFavoriteError, ServiceResult, service_err, service_ok


class FavoriteService(BaseService):
    """
    Service for managing favorites.

    The duplicate check in add_favorite() is a lookup followed by an insert.
    Two concurrent requests for the same pair can both pass the lookup and
    store two favorites; remove_favorite() then needs one call per copy.
    """

    def __init__(self, favorites: FavoriteRepository, products: ProductRepository, **kwargs):
        super().__init__(**kwargs)
        self.favorites = favorites
        self.products = products

    @BaseService.log_performance
    def add_favorite(self, user_id: str, product_id: str) -> ServiceResult[Favorite]:
        if self.products.find_by_id(product_id) is None:
            return service_err(AddFavoriteError.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        if self.favorites.find_by_user_id_and_product_id(user_id, product_id) is not None:
            return service_err(AddFavoriteError.ALREADY_FAVORITED)

        favorite = Favorite(
            id=self.id_factory(),
            user_id=user_id,
            product_id=product_id,
            created_at=self.clock(),
        )
        saved = self.favorites.save(favorite)
        favorites_added_total.inc()
        return service_ok(saved)

    @BaseService.log_performance
    def remove_favorite(self, user_id: str, product_id: str) -> ServiceResult[None]:
        if not self.favorites.delete_by_user_id_and_product_id(user_id, product_id):
            return service_err(RemoveFavoriteError.NOT_FOUND)
        return service_ok()

    def find_by_user_id(self, user_id: str) -> List[Favorite]:
        return self.favorites.find_by_user_id(user_id)

    def is_favorited(self, user_id: str, product_id: str) -> bool:
        return self.favorites.find_by_user_id_and_product_id(user_id, product_id) is not None

    def delete_by_product_id(self, product_id: str) -> int:
        """Remove every favorite of a product; returns how many were removed."""
        removed = self.favorites.delete_by_product_id(product_id)
        if removed:
            self.logger.debug(f"Removed {removed} favorites of product {product_id}")
        return removed
