import random
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import factory

from marketplace.domain.models import Category, Favorite, Order, Product, User


BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock: every call returns a time one second later."""

    def __init__(self, start: datetime = BASE_TIME):
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


class SequentialIds:
    """Id source returning prefix-1, prefix-2, ..."""

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.counter = 0

    def __call__(self) -> str:
        self.counter += 1
        return f"{self.prefix}-{self.counter}"


class UserFactory(factory.Factory):
    class Meta:
        model = User

    id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    password_hash = "md5$salt$hash"
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    phone_number = None
    created_at = factory.Sequence(lambda n: BASE_TIME + timedelta(minutes=n))


class ProductFactory(factory.Factory):
    class Meta:
        model = Product

    id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("sentence", nb_words=8)
    price = factory.LazyFunction(lambda: Decimal(f"{random.randint(10, 500)}.00"))
    category = Category.STRENGTH
    owner_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    images = ()
    created_at = factory.Sequence(lambda n: BASE_TIME + timedelta(minutes=n))


class OrderFactory(factory.Factory):
    class Meta:
        model = Order

    id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    product_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    quantity = 1
    total_price = Decimal("10.00")
    user_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    created_at = factory.Sequence(lambda n: BASE_TIME + timedelta(minutes=n))


class FavoriteFactory(factory.Factory):
    class Meta:
        model = Favorite

    id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    user_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    product_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    created_at = factory.Sequence(lambda n: BASE_TIME + timedelta(minutes=n))
