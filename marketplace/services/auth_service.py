"""
AuthService - Registration, login and account deletion

Registers users with a unique lowercased email, logs them in, and deletes
accounts together with the products they own.

Deleting an account is a sequence of independent writes, not a transaction:
favorites of each owned product, then the products, then the user. A storage
fault part way through leaves the earlier steps applied. The fault is logged
with the step it interrupted and re-raised; calling delete_user() again
finishes the remaining steps.
"""

from dataclasses import dataclass
from typing import Optional

from infrastructure.persistence import UserRepository
from infrastructure.security import PasswordHasherInterface, TokenIssuerInterface
from marketplace.domain.models import User
from marketplace.infra.observability.metrics import (
    cascade_deleted_total,
    login_attempts_total,
    users_registered_total,
)

from .base import AuthError, BaseService, DeleteUserError, ServiceResult, service_err, service_ok
from .favorite_service import FavoriteService
from .product_service import ProductService


@dataclass(frozen=True)
class AuthSession:
    """An authenticated user and the bearer token issued for them."""

    user: User
    token: str


def _clean_phone_number(phone_number: Optional[str]) -> Optional[str]:
    if phone_number is None:
        return None
    stripped = phone_number.strip()
    return stripped or None


class AuthService(BaseService):
    """
    Service for user accounts.

    Dependencies:
    - UserRepository: user persistence and email lookups
    - PasswordHasherInterface: password hashing and verification
    - TokenIssuerInterface: bearer token issuing
    - ProductService / FavoriteService: account deletion cascade
    """

    def __init__(
        self,
        users: UserRepository,
        password_hasher: PasswordHasherInterface,
        token_issuer: TokenIssuerInterface,
        product_service: ProductService,
        favorite_service: FavoriteService,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.users = users
        self.password_hasher = password_hasher
        self.token_issuer = token_issuer
        self.product_service = product_service
        self.favorite_service = favorite_service

    @BaseService.log_performance
    def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone_number: Optional[str] = None,
    ) -> ServiceResult[AuthSession]:
        """
        Register a new user and issue a token.

        The email is lowercased before the uniqueness check and stored that way.
        Names are trimmed; a blank phone number is stored as None.

        Two concurrent registrations with the same email can both pass the
        uniqueness check; nothing below this call prevents the duplicate.

        Returns:
            ServiceResult with an AuthSession or AuthError.EMAIL_ALREADY_EXISTS
        """
        normalized_email = email.strip().lower()

        if self.users.exists_by_email(normalized_email):
            return service_err(AuthError.EMAIL_ALREADY_EXISTS, f"Email {normalized_email} is already registered")

        user = User(
            id=self.id_factory(),
            email=normalized_email,
            password_hash=self.password_hasher.hash(password),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            phone_number=_clean_phone_number(phone_number),
            created_at=self.clock(),
        )
        saved = self.users.save(user)
        users_registered_total.inc()

        self.logger.info(f"Registered user {saved.id}")
        return service_ok(AuthSession(user=saved, token=self.token_issuer.issue(saved)))

    @BaseService.log_performance
    def login(self, email: str, password: str) -> ServiceResult[AuthSession]:
        """
        Log a user in by email and password.

        Unknown emails and wrong passwords both return INVALID_CREDENTIALS.
        """
        user = self.users.find_by_email(email.strip().lower())

        if user is None or not self.password_hasher.verify(password, user.password_hash):
            login_attempts_total.labels(outcome="rejected").inc()
            return service_err(AuthError.INVALID_CREDENTIALS, "Invalid email or password")

        login_attempts_total.labels(outcome="success").inc()
        return service_ok(AuthSession(user=user, token=self.token_issuer.issue(user)))

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        return self.users.find_by_id(user_id)

    @BaseService.log_performance
    def delete_user(self, user_id: str) -> ServiceResult[None]:
        """
        Delete a user and everything hanging off their products.

        Steps, in order:
        1. Remove favorites (by any user) of each product the user owns
        2. Delete the user's products
        3. Delete the user

        Favorites and orders placed by the user on other people's products
        are left in place.
        """
        if self.users.find_by_id(user_id) is None:
            return service_err(DeleteUserError.NOT_FOUND, f"User {user_id} not found")

        step = "remove favorites"
        try:
            favorites_removed = 0
            for product in self.product_service.find_by_owner_id(user_id):
                favorites_removed += self.favorite_service.delete_by_product_id(product.id)

            step = "delete products"
            products_removed = self.product_service.delete_by_owner_id(user_id)

            step = "delete user"
            self.users.delete_by_id(user_id)
        except Exception:
            self.logger.warning(f"Account deletion for {user_id} interrupted at step '{step}'")
            raise

        cascade_deleted_total.labels(entity="favorite").inc(favorites_removed)
        cascade_deleted_total.labels(entity="product").inc(products_removed)
        cascade_deleted_total.labels(entity="user").inc()
        self.logger.info(
            f"Deleted user {user_id} with {products_removed} products and {favorites_removed} favorites"
        )
        return service_ok()
