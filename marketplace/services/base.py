"""
Base classes and utilities for the service layer.

This module provides the ServiceResult pattern (inspired by Rust's Result type),
the closed error sets returned by each service operation, and the BaseService
class for all marketplace services.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

from django.utils import timezone

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Expected business-rule outcomes (invalid input, missing entity, wrong owner)
    come back as a failed result instead of an exception. Storage faults are not
    results; they propagate as exceptions.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Member of the operation's error enum (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = product_service.create_product(...)
        >>> if result.ok:
        ...     product = result.value
        >>> elif result.error is CreateProductError.PRICE_MUST_BE_POSITIVE:
        ...     ...
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[Enum] = None
    error_detail: Optional[str] = None

    def to_dict(self) -> dict:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary with 'success' and either 'data' or 'error'
        """
        if self.ok:
            return {"success": True, "data": self.value}
        return {
            "success": False,
            "error": {"code": self.error.value, "message": self.error_detail},
        }


def service_ok(value: T = None) -> ServiceResult[T]:
    """
    Create a successful ServiceResult.

    Args:
        value: The success value (None for operations with nothing to return)

    Returns:
        ServiceResult with ok=True and the value
    """
    return ServiceResult(ok=True, value=value)


def service_err(error: Enum, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error enum member (e.g., CreateOrderError.INVALID_QUANTITY)
        error_detail: Human-readable error message

    Returns:
        ServiceResult with ok=False and error information

    Example:
        >>> return service_err(DeleteOrderError.NOT_FOUND, f"Order {order_id} does not exist")
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error.value)


def new_id() -> str:
    """Generate a new opaque entity id."""
    return str(uuid.uuid4())


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator
    - Injectable id source and clock

    Usage:
        class OrderService(BaseService):
            def __init__(self, orders, products):
                super().__init__()
                self.orders = orders

            @BaseService.log_performance
            def create_order(self, ...):
                ...
    """

    def __init__(self, id_factory: Callable[[], str] = new_id, clock: Callable = timezone.now):
        """
        Initialize base service.

        Args:
            id_factory: Returns a new unique id per created entity
            clock: Returns the current aware datetime for created_at stamps
        """
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)
        self.id_factory = id_factory
        self.clock = clock

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Failed ServiceResults are logged at WARNING (they are caller errors, not
        faults). Exceptions are logged at ERROR and re-raised.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error.value}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper


# Closed error sets, one per service operation


class CreateProductError(str, Enum):
    NAME_REQUIRED = "name_required"
    PRICE_REQUIRED = "price_required"
    PRICE_MUST_BE_POSITIVE = "price_must_be_positive"
    CATEGORY_REQUIRED = "category_required"
    DESCRIPTION_TOO_LONG = "description_too_long"
    TOO_MANY_IMAGES = "too_many_images"
    IMAGE_TOO_LARGE = "image_too_large"


class UpdateProductError(str, Enum):
    NOT_FOUND = "product_not_found"
    NOT_OWNER = "not_product_owner"
    NAME_REQUIRED = "name_required"
    PRICE_REQUIRED = "price_required"
    PRICE_MUST_BE_POSITIVE = "price_must_be_positive"
    CATEGORY_REQUIRED = "category_required"
    DESCRIPTION_TOO_LONG = "description_too_long"
    TOO_MANY_IMAGES = "too_many_images"
    IMAGE_TOO_LARGE = "image_too_large"


class DeleteProductError(str, Enum):
    NOT_FOUND = "product_not_found"
    NOT_OWNER = "not_product_owner"


class GetProductError(str, Enum):
    NOT_FOUND = "product_not_found"


class CreateOrderError(str, Enum):
    PRODUCT_ID_REQUIRED = "product_id_required"
    INVALID_QUANTITY = "invalid_quantity"
    PRODUCT_NOT_FOUND = "product_not_found"


class DeleteOrderError(str, Enum):
    NOT_FOUND = "order_not_found"
    NOT_OWNER = "not_order_owner"


class AddFavoriteError(str, Enum):
    PRODUCT_NOT_FOUND = "product_not_found"
    ALREADY_FAVORITED = "already_favorited"


class RemoveFavoriteError(str, Enum):
    NOT_FOUND = "favorite_not_found"


class AuthError(str, Enum):
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    INVALID_CREDENTIALS = "invalid_credentials"


class DeleteUserError(str, Enum):
    NOT_FOUND = "user_not_found"
