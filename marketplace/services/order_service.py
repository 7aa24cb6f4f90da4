"""
OrderService - Order placement

Places orders for a quantity of one product and lets the ordering user delete them.

The order total is computed once from the product's price at placement time;
later price changes do not touch existing orders.
"""

from typing import List, Optional

from infrastructure.persistence import OrderRepository, ProductRepository
from marketplace.domain.models import Order
from marketplace.infra.observability.metrics import order_value, orders_placed_total

from .base import BaseService, CreateOrderError, DeleteOrderError, ServiceResult, service_err, service_ok


class OrderService(BaseService):
    """
    Service for managing orders.

    Orders have no lifecycle beyond existing or not existing.

    Dependencies:
    - OrderRepository: order persistence
    - ProductRepository: product lookup for the price snapshot
    """

    def __init__(self, orders: OrderRepository, products: ProductRepository, **kwargs):
        super().__init__(**kwargs)
        self.orders = orders
        self.products = products

    @BaseService.log_performance
    def create_order(
        self, product_id: Optional[str], quantity: Optional[int], user_id: Optional[str] = None
    ) -> ServiceResult[Order]:
        """
        Place an order.

        Checks run in order: product id present, quantity >= 1, product exists.

        Args:
            product_id: Product to order
            quantity: Number of units, an int of at least 1
            user_id: Ordering user, or None for a guest order

        Returns:
            ServiceResult with the created Order or a CreateOrderError
        """
        if not isinstance(product_id, str) or not product_id.strip():
            orders_placed_total.labels(status="rejected").inc()
            return service_err(CreateOrderError.PRODUCT_ID_REQUIRED)

        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            orders_placed_total.labels(status="rejected").inc()
            return service_err(CreateOrderError.INVALID_QUANTITY, f"Invalid quantity: {quantity}")

        product = self.products.find_by_id(product_id)
        if product is None:
            orders_placed_total.labels(status="rejected").inc()
            return service_err(CreateOrderError.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        order = Order(
            id=self.id_factory(),
            product_id=product.id,
            quantity=quantity,
            total_price=product.price * quantity,
            user_id=user_id,
            created_at=self.clock(),
        )
        saved = self.orders.save(order)

        orders_placed_total.labels(status="success").inc()
        order_value.observe(float(saved.total_price))
        self.logger.info(f"Order {saved.id} placed: {quantity} x {product.id}, total {saved.total_price}")
        return service_ok(saved)

    def find_by_id(self, order_id: str) -> Optional[Order]:
        return self.orders.find_by_id(order_id)

    def find_by_user_id(self, user_id: str) -> List[Order]:
        return self.orders.find_by_user_id(user_id)

    @BaseService.log_performance
    def delete_order(self, order_id: str, requesting_user_id: str) -> ServiceResult[None]:
        """
        Delete an order placed by the requesting user.

        Guest orders have no owner, so nobody can delete them through this call.
        """
        order = self.orders.find_by_id(order_id)
        if order is None:
            return service_err(DeleteOrderError.NOT_FOUND, f"Order {order_id} not found")

        if order.user_id != requesting_user_id:
            return service_err(DeleteOrderError.NOT_OWNER, "You did not place this order")

        self.orders.delete_by_id(order_id)
        return service_ok()
