"""
DynamoDB Item Codec
===================

Translates marketplace entities to DynamoDB items and back.

Items use camelCase attribute names. Optional values are omitted from the item
instead of being written as null. Decoding normalizes legacy item shapes so the
domain model never sees them.
"""

import re
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping

from marketplace.domain.models import Category, Favorite, Order, Product, User

from ..interface import RepositoryException

Item = Dict[str, Any]


def normalize_images(value: Any) -> List[str]:
    """
    Read the ``images`` attribute in any shape it was ever written in.

    Older items stored a single image as a plain string; current items store a
    list. Both become a list of strings. Missing or blank values become an
    empty list.

    Args:
        value: Raw attribute value from the item (list, str or None)

    Returns:
        List of encoded images
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [image for image in value if isinstance(image, str)]
    if isinstance(value, str) and value.strip():
        return [value]
    return []


def _required(item: Mapping[str, Any], attribute: str) -> Any:
    value = item.get(attribute)
    if value is None:
        raise RepositoryException(f"Item {item.get('id', '<unknown>')} is missing attribute '{attribute}'")
    return value


_FRACTION = re.compile(r"\.(\d+)")


def _decode_datetime(value: str) -> datetime:
    # Items written by other clients may use a trailing "Z" and up to nanosecond precision
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    value = _FRACTION.sub(lambda match: "." + match.group(1)[:6].ljust(6, "0"), value, count=1)
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise RepositoryException(f"Invalid timestamp '{value}'") from e


def product_to_item(product: Product) -> Item:
    item: Item = {
        "id": product.id,
        "name": product.name,
        "price": Decimal(product.price),
        "category": product.category.name,
        "ownerId": product.owner_id,
        "createdAt": product.created_at.isoformat(),
    }
    if product.description is not None:
        item["description"] = product.description
    if product.images:
        item["images"] = list(product.images)
    return item


def item_to_product(item: Mapping[str, Any]) -> Product:
    return Product(
        id=_required(item, "id"),
        name=_required(item, "name"),
        price=Decimal(str(_required(item, "price"))),
        category=Category.from_string(item.get("category")) or Category.OTHER,
        owner_id=_required(item, "ownerId"),
        created_at=_decode_datetime(_required(item, "createdAt")),
        description=item.get("description"),
        images=tuple(normalize_images(item.get("images"))),
    )


def user_to_item(user: User) -> Item:
    item: Item = {
        "id": user.id,
        "email": user.email,
        "passwordHash": user.password_hash,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "createdAt": user.created_at.isoformat(),
    }
    if user.phone_number is not None:
        item["phoneNumber"] = user.phone_number
    return item


def item_to_user(item: Mapping[str, Any]) -> User:
    return User(
        id=_required(item, "id"),
        email=_required(item, "email"),
        password_hash=_required(item, "passwordHash"),
        first_name=_required(item, "firstName"),
        last_name=_required(item, "lastName"),
        created_at=_decode_datetime(_required(item, "createdAt")),
        phone_number=item.get("phoneNumber"),
    )


def order_to_item(order: Order) -> Item:
    item: Item = {
        "id": order.id,
        "productId": order.product_id,
        "quantity": order.quantity,
        "totalPrice": Decimal(order.total_price),
        "createdAt": order.created_at.isoformat(),
    }
    if order.user_id is not None:
        item["userId"] = order.user_id
    return item


def item_to_order(item: Mapping[str, Any]) -> Order:
    return Order(
        id=_required(item, "id"),
        product_id=_required(item, "productId"),
        quantity=int(_required(item, "quantity")),
        total_price=Decimal(str(_required(item, "totalPrice"))),
        created_at=_decode_datetime(_required(item, "createdAt")),
        user_id=item.get("userId"),
    )


def favorite_to_item(favorite: Favorite) -> Item:
    return {
        "id": favorite.id,
        "userId": favorite.user_id,
        "productId": favorite.product_id,
        "createdAt": favorite.created_at.isoformat(),
    }


def item_to_favorite(item: Mapping[str, Any]) -> Favorite:
    return Favorite(
        id=_required(item, "id"),
        user_id=_required(item, "userId"),
        product_id=_required(item, "productId"),
        created_at=_decode_datetime(_required(item, "createdAt")),
    )
