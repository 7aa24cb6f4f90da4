"""
DynamoDB Repositories
=====================

Concrete repository implementations backed by DynamoDB tables via boto3.

Each entity lives in its own table keyed by ``id``. Foreign-key lookups query
the matching global secondary index. Product search has no index to use and is
a full scan filtered in process, which is only suitable for small catalogs.
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from marketplace.domain.models import Category, Favorite, Order, Product, User

from ..filtering import filter_products, newest_first_page
from ..interface import (
    FavoriteRepository,
    OrderRepository,
    ProductRepository,
    RepositoryException,
    UserRepository,
)
from . import codec
from .client import EMAIL_INDEX, OWNER_INDEX, PRODUCT_INDEX, USER_INDEX

logger = logging.getLogger(__name__)


class DynamoDbRepository:
    """
    Table access helpers shared by the DynamoDB repositories.

    Every call to the table goes through these helpers so backend faults are
    logged once and re-raised as RepositoryException.
    """

    def __init__(self, table: Any):
        self.table = table

    def _call(self, operation: str, func: Callable[..., Dict[str, Any]], **kwargs) -> Dict[str, Any]:
        try:
            return func(**kwargs)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"DynamoDB {operation} failed on {self.table.name}: {str(e)}")
            raise RepositoryException(f"DynamoDB {operation} failed: {str(e)}") from e

    def _put(self, item: Dict[str, Any]) -> None:
        self._call("put_item", self.table.put_item, Item=item)

    def _get(self, key: str) -> Optional[Dict[str, Any]]:
        response = self._call("get_item", self.table.get_item, Key={"id": key}, ConsistentRead=True)
        item = response.get("Item")
        return item or None

    def _delete(self, key: str) -> bool:
        response = self._call("delete_item", self.table.delete_item, Key={"id": key}, ReturnValues="ALL_OLD")
        return bool(response.get("Attributes"))

    def _paginate(self, operation: str, func: Callable[..., Dict[str, Any]], **kwargs) -> Iterator[Dict[str, Any]]:
        while True:
            response = self._call(operation, func, **kwargs)
            yield from response.get("Items", [])
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key

    def _query(self, index_name: str, key_condition, filter_expression=None) -> Iterator[Dict[str, Any]]:
        kwargs: Dict[str, Any] = {"IndexName": index_name, "KeyConditionExpression": key_condition}
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression
        return self._paginate("query", self.table.query, **kwargs)

    def _scan(self) -> Iterator[Dict[str, Any]]:
        return self._paginate("scan", self.table.scan)


class DynamoDbProductRepository(DynamoDbRepository, ProductRepository):
    def save(self, product: Product) -> Product:
        self._put(codec.product_to_item(product))
        return product

    def find_by_id(self, product_id: str) -> Optional[Product]:
        item = self._get(product_id)
        return codec.item_to_product(item) if item else None

    def find_all(self) -> List[Product]:
        return [codec.item_to_product(item) for item in self._scan()]

    def find_by_owner_id(self, owner_id: str) -> List[Product]:
        items = self._query(OWNER_INDEX, Key("ownerId").eq(owner_id))
        return [codec.item_to_product(item) for item in items]

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
        return self._delete(product_id)

    def delete_by_owner_id(self, owner_id: str) -> int:
        products = self.find_by_owner_id(owner_id)
        removed = sum(1 for product in products if self._delete(product.id))
        logger.debug(f"Deleted {removed} products owned by {owner_id}")
        return removed


class DynamoDbUserRepository(DynamoDbRepository, UserRepository):
    """
    User table with an ``email-index`` GSI.

    Email uniqueness is checked by the caller before saving; two concurrent
    registrations with the same email can both succeed.
    """

    def save(self, user: User) -> User:
        self._put(codec.user_to_item(user))
        return user

    def find_by_id(self, user_id: str) -> Optional[User]:
        item = self._get(user_id)
        return codec.item_to_user(item) if item else None

    def find_by_email(self, email: str) -> Optional[User]:
        for item in self._query(EMAIL_INDEX, Key("email").eq(email.lower())):
            return codec.item_to_user(item)
        return None

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def find_all(self) -> List[User]:
        return [codec.item_to_user(item) for item in self._scan()]

    def delete_by_id(self, user_id: str) -> bool:
        return self._delete(user_id)


class DynamoDbOrderRepository(DynamoDbRepository, OrderRepository):
    def save(self, order: Order) -> Order:
        self._put(codec.order_to_item(order))
        return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        item = self._get(order_id)
        return codec.item_to_order(item) if item else None

    def find_all(self) -> List[Order]:
        return [codec.item_to_order(item) for item in self._scan()]

    def find_by_user_id(self, user_id: str) -> List[Order]:
        items = self._query(USER_INDEX, Key("userId").eq(user_id))
        return [codec.item_to_order(item) for item in items]

    def delete_by_id(self, order_id: str) -> bool:
        return self._delete(order_id)


class DynamoDbFavoriteRepository(DynamoDbRepository, FavoriteRepository):
    """Favorite table with ``user-index`` and ``product-index`` GSIs."""

    def save(self, favorite: Favorite) -> Favorite:
        self._put(codec.favorite_to_item(favorite))
        return favorite

    def find_by_id(self, favorite_id: str) -> Optional[Favorite]:
        item = self._get(favorite_id)
        return codec.item_to_favorite(item) if item else None

    def find_by_user_id(self, user_id: str) -> List[Favorite]:
        items = self._query(USER_INDEX, Key("userId").eq(user_id))
        return [codec.item_to_favorite(item) for item in items]

    def find_by_user_id_and_product_id(self, user_id: str, product_id: str) -> Optional[Favorite]:
        # No compound index: query by user, filter on product
        items = self._query(USER_INDEX, Key("userId").eq(user_id), Attr("productId").eq(product_id))
        for item in items:
            return codec.item_to_favorite(item)
        return None

    def delete_by_id(self, favorite_id: str) -> bool:
        return self._delete(favorite_id)

    def delete_by_user_id_and_product_id(self, user_id: str, product_id: str) -> bool:
        favorite = self.find_by_user_id_and_product_id(user_id, product_id)
        if favorite is None:
            return False
        return self._delete(favorite.id)

    def delete_by_product_id(self, product_id: str) -> int:
        items = list(self._query(PRODUCT_INDEX, Key("productId").eq(product_id)))
        return sum(1 for item in items if self._delete(item["id"]))
