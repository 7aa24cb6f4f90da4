"""
ProductService - Product CRUD & Search

Handles product creation, owner-only updates and deletes, and catalog search.

Validation runs in a fixed order and reports only the first failing check:
name, price presence, price positivity, category, description length,
image count, image size.
"""

import dataclasses
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Sequence, Tuple, Union

from infrastructure.persistence import FavoriteRepository, ProductRepository, UserRepository
from marketplace.domain.models import Category, Page, Product, ProductDetail, SellerInfo
from marketplace.infra.observability.metrics import products_created_total

from .base import (
    BaseService,
    CreateProductError,
    DeleteProductError,
    GetProductError,
    ServiceResult,
    UpdateProductError,
    service_err,
    service_ok,
)

MAX_IMAGE_SIZE_BYTES = 100_000
MAX_IMAGES = 3
MAX_DESCRIPTION_LENGTH = 2000
DEFAULT_SEARCH_LIMIT = 20


def parse_price(value: Any) -> Optional[Decimal]:
    """Coerce price input to Decimal; unparseable input counts as missing."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return price if price.is_finite() else None


def parse_category(value: Any) -> Optional[Category]:
    if isinstance(value, Category):
        return value
    if isinstance(value, str):
        return Category.from_string(value)
    return None


def validate_product_fields(
    name: Optional[str],
    description: Optional[str],
    price: Optional[Decimal],
    category: Optional[Category],
    images: Sequence[str],
) -> Optional[CreateProductError]:
    """
    Run the product field checks in order.

    Returns:
        The first failing check's error, or None if every field is valid
    """
    if name is None or not name.strip():
        return CreateProductError.NAME_REQUIRED
    if price is None:
        return CreateProductError.PRICE_REQUIRED
    if price <= 0:
        return CreateProductError.PRICE_MUST_BE_POSITIVE
    if category is None:
        return CreateProductError.CATEGORY_REQUIRED
    if description is not None and len(description) > MAX_DESCRIPTION_LENGTH:
        return CreateProductError.DESCRIPTION_TOO_LONG
    if len(images) > MAX_IMAGES:
        return CreateProductError.TOO_MANY_IMAGES
    if any(len(image) > MAX_IMAGE_SIZE_BYTES for image in images):
        return CreateProductError.IMAGE_TOO_LARGE
    return None


def _image_tuple(images: Union[str, Sequence[str], None]) -> Tuple[str, ...]:
    # A bare string is one image, not a sequence of one-character images
    if isinstance(images, str):
        return (images,) if images.strip() else ()
    return tuple(images or ())


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None or not description.strip():
        return None
    return description


class ProductService(BaseService):
    """
    Service for managing the product catalog.

    Responsibilities:
    - Create products for an authenticated owner
    - Update and delete products (owner only)
    - List, search and count products
    - Build product detail views with seller information

    Dependencies:
    - ProductRepository: product persistence
    - UserRepository: seller lookups for product details (optional)
    - FavoriteRepository: favorites removed with a deleted product (optional)
    """

    def __init__(
        self,
        products: ProductRepository,
        users: Optional[UserRepository] = None,
        favorites: Optional[FavoriteRepository] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.products = products
        self.users = users
        self.favorites = favorites

    @BaseService.log_performance
    def create_product(
        self,
        name: Optional[str],
        description: Optional[str],
        price: Any,
        category: Any,
        owner_id: str,
        images: Union[str, Sequence[str], None] = None,
    ) -> ServiceResult[Product]:
        """
        Create a new product.

        Args:
            name: Product name (required, not blank)
            description: Optional description; blank text is stored as None
            price: Decimal, int or numeric string; must be positive
            category: Category or category name
            owner_id: Id of the authenticated user listing the product
            images: Up to three encoded images

        Returns:
            ServiceResult with the created Product or a CreateProductError
        """
        image_list = _image_tuple(images)
        parsed_price = parse_price(price)
        parsed_category = parse_category(category)

        error = validate_product_fields(name, description, parsed_price, parsed_category, image_list)
        if error is not None:
            return service_err(error)

        product = Product(
            id=self.id_factory(),
            name=name,
            description=_clean_description(description),
            price=parsed_price,
            category=parsed_category,
            owner_id=owner_id,
            images=image_list,
            created_at=self.clock(),
        )
        saved = self.products.save(product)
        products_created_total.inc()

        self.logger.info(f"Created product: {saved.name} (id={saved.id}) by owner {owner_id}")
        return service_ok(saved)

    @BaseService.log_performance
    def update_product(
        self,
        product_id: str,
        requesting_user_id: str,
        name: Optional[str],
        description: Optional[str],
        price: Any,
        category: Any,
        images: Union[str, Sequence[str], None] = None,
    ) -> ServiceResult[Product]:
        """
        Replace a product's editable fields (owner only).

        Existence and ownership are checked before any field validation, so a
        non-owner always gets NOT_OWNER no matter what fields were sent. The id,
        owner and created_at are kept from the stored product.

        Returns:
            ServiceResult with the updated Product or an UpdateProductError
        """
        existing = self.products.find_by_id(product_id)
        if existing is None:
            return service_err(UpdateProductError.NOT_FOUND, f"Product {product_id} not found")

        if existing.owner_id != requesting_user_id:
            return service_err(UpdateProductError.NOT_OWNER, "You do not own this product")

        image_list = _image_tuple(images)
        parsed_price = parse_price(price)
        parsed_category = parse_category(category)

        error = validate_product_fields(name, description, parsed_price, parsed_category, image_list)
        if error is not None:
            return service_err(UpdateProductError[error.name])

        updated = dataclasses.replace(
            existing,
            name=name,
            description=_clean_description(description),
            price=parsed_price,
            category=parsed_category,
            images=image_list,
        )
        saved = self.products.save(updated)

        self.logger.info(f"Updated product: {saved.name} (id={product_id})")
        return service_ok(saved)

    @BaseService.log_performance
    def delete_product(self, product_id: str, requesting_user_id: str) -> ServiceResult[None]:
        """
        Delete a product (owner only). Checks existence, then ownership.

        Favorites of the product are removed after the product itself; a
        failure in between leaves favorites pointing at a missing product.
        """
        product = self.products.find_by_id(product_id)
        if product is None:
            return service_err(DeleteProductError.NOT_FOUND, f"Product {product_id} not found")

        if product.owner_id != requesting_user_id:
            return service_err(DeleteProductError.NOT_OWNER, "You do not own this product")

        self.products.delete_by_id(product_id)
        removed_favorites = self.favorites.delete_by_product_id(product_id) if self.favorites is not None else 0
        self.logger.info(f"Deleted product {product_id} and {removed_favorites} favorites")
        return service_ok()

    def find_all(self) -> List[Product]:
        return self.products.find_all()

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return self.products.find_by_id(product_id)

    def find_by_owner_id(self, owner_id: str) -> List[Product]:
        return self.products.find_by_owner_id(owner_id)

    def search(
        self,
        query: Optional[str] = None,
        category: Optional[Category] = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
        offset: int = 0,
    ) -> List[Product]:
        return self.products.search(query, category, limit, offset)

    def count(self, query: Optional[str] = None, category: Optional[Category] = None) -> int:
        return self.products.count(query, category)

    @BaseService.log_performance
    def search_page(
        self,
        query: Optional[str] = None,
        category: Optional[Category] = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
        offset: int = 0,
    ) -> Page:
        """
        Search products and return one page with the total match count.

        The page and the total come from two separate reads, so a concurrent
        write can make them disagree.
        """
        items = self.products.search(query, category, limit, offset)
        total = self.products.count(query, category)
        return Page(items=items, total=total, limit=limit, offset=offset)

    @BaseService.log_performance
    def get_product_detail(self, product_id: str) -> ServiceResult[ProductDetail]:
        """
        Get a product together with its seller's public details.

        A seller whose account no longer exists is reported with the product's
        owner id and empty names.
        """
        product = self.products.find_by_id(product_id)
        if product is None:
            return service_err(GetProductError.NOT_FOUND, f"Product {product_id} not found")

        owner = self.users.find_by_id(product.owner_id) if self.users is not None else None
        if owner is not None:
            seller = SellerInfo(
                id=owner.id,
                first_name=owner.first_name,
                last_name=owner.last_name,
                phone_number=owner.phone_number,
            )
        else:
            seller = SellerInfo(id=product.owner_id, first_name="", last_name="")

        return service_ok(ProductDetail(product=product, seller=seller))

    def list_categories(self) -> List[Tuple[str, str]]:
        """Return ``(name, display_name)`` pairs for every category."""
        return Category.choices()

    def delete_by_owner_id(self, owner_id: str) -> int:
        return self.products.delete_by_owner_id(owner_id)
