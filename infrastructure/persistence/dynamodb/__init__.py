"""
DynamoDB persistence backend.
"""

from .client import DynamoDbTables, TableNames
from .codec import normalize_images
from .repositories import (
    DynamoDbFavoriteRepository,
    DynamoDbOrderRepository,
    DynamoDbProductRepository,
    DynamoDbUserRepository,
)

__all__ = [
    "DynamoDbTables",
    "TableNames",
    "normalize_images",
    "DynamoDbProductRepository",
    "DynamoDbUserRepository",
    "DynamoDbOrderRepository",
    "DynamoDbFavoriteRepository",
]
