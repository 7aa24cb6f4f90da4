"""
DynamoDB Table Access
=====================

Builds the boto3 DynamoDB resource from settings and resolves table and index names.

Configuration (in settings.py):
    INFRASTRUCTURE["AWS_REGION"]: AWS region for DynamoDB
    INFRASTRUCTURE["DYNAMODB_TABLE_PREFIX"]: Table name prefix (default "webshop")
    INFRASTRUCTURE["DYNAMODB_ENDPOINT_URL"]: Endpoint override for local DynamoDB (optional)
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import boto3
from django.conf import settings

logger = logging.getLogger(__name__)

OWNER_INDEX = "owner-index"
USER_INDEX = "user-index"
PRODUCT_INDEX = "product-index"
EMAIL_INDEX = "email-index"


@dataclass
class TableNames:
    """Physical table names for each entity."""

    products: str
    users: str
    orders: str
    favorites: str

    @classmethod
    def with_prefix(cls, prefix: str) -> "TableNames":
        return cls(
            products=f"{prefix}-products",
            users=f"{prefix}-users",
            orders=f"{prefix}-orders",
            favorites=f"{prefix}-favorites",
        )


def _infrastructure_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    return getattr(settings, "INFRASTRUCTURE", {}).get(name) or default


class DynamoDbTables:
    """
    Resolves boto3 Table objects for the marketplace tables.

    Args:
        resource: boto3 DynamoDB service resource (built from settings if None)
        table_prefix: Table name prefix (read from settings if None)
    """

    def __init__(self, resource: Any = None, table_prefix: Optional[str] = None):
        self.resource = resource or self._create_resource()
        prefix = table_prefix or _infrastructure_setting("DYNAMODB_TABLE_PREFIX", "webshop")
        self.names = TableNames.with_prefix(prefix)

    @staticmethod
    def _create_resource():
        region = _infrastructure_setting("AWS_REGION", "eu-central-1")
        endpoint_url = _infrastructure_setting("DYNAMODB_ENDPOINT_URL")
        logger.info(f"Creating DynamoDB resource: region={region}, endpoint={endpoint_url or 'default'}")
        return boto3.resource("dynamodb", region_name=region, endpoint_url=endpoint_url)

    def products(self):
        return self.resource.Table(self.names.products)

    def users(self):
        return self.resource.Table(self.names.users)

    def orders(self):
        return self.resource.Table(self.names.orders)

    def favorites(self):
        return self.resource.Table(self.names.favorites)
