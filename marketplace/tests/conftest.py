import pytest

from infrastructure.persistence import RepositoryFactory
from infrastructure.persistence.memory import InMemoryStore
from infrastructure.security import DjangoPasswordHasher, JWTTokenIssuer
from marketplace.services import AuthService, FavoriteService, OrderService, ProductService

from .factories import FakeClock, SequentialIds


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def repositories(store):
    return RepositoryFactory.create_memory(store)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def product_service(repositories, clock, ids):
    return ProductService(
        products=repositories.products,
        users=repositories.users,
        favorites=repositories.favorites,
        id_factory=ids,
        clock=clock,
    )


@pytest.fixture
def order_service(repositories, clock, ids):
    return OrderService(orders=repositories.orders, products=repositories.products, id_factory=ids, clock=clock)


@pytest.fixture
def favorite_service(repositories, clock, ids):
    return FavoriteService(
        favorites=repositories.favorites, products=repositories.products, id_factory=ids, clock=clock
    )


@pytest.fixture
def token_issuer():
    return JWTTokenIssuer()


@pytest.fixture
def auth_service(repositories, product_service, favorite_service, token_issuer, clock, ids):
    return AuthService(
        users=repositories.users,
        password_hasher=DjangoPasswordHasher(),
        token_issuer=token_issuer,
        product_service=product_service,
        favorite_service=favorite_service,
        id_factory=ids,
        clock=clock,
    )
