"""
Marketplace Domain Models
=========================

Immutable value records for the webshop: products, users, orders and favorites.

Records are plain frozen dataclasses. Persistence adapters in
``infrastructure.persistence`` translate them to and from their storage shape;
nothing in this module knows how or where they are stored.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple


class Category(str, Enum):
    """Product category enumeration."""

    CARDIO = "CARDIO"
    STRENGTH = "STRENGTH"
    MOBILITY = "MOBILITY"
    RECOVERY = "RECOVERY"
    HOME_GYM = "HOME_GYM"
    ACCESSORIES = "ACCESSORIES"
    PLYOMETRICS = "PLYOMETRICS"
    CORE = "CORE"
    OUTDOOR = "OUTDOOR"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _CATEGORY_DISPLAY_NAMES[self]

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["Category"]:
        """
        Parse a category member name, ignoring case.

        Args:
            value: Member name such as ``"home_gym"`` or ``"CARDIO"``

        Returns:
            Matching Category or None if the name is unknown
        """
        if not value:
            return None
        normalized = value.strip().upper()
        for member in cls:
            if member.name == normalized:
                return member
        return None

    @classmethod
    def choices(cls) -> List[Tuple[str, str]]:
        """Return ``(name, display_name)`` pairs for every category."""
        return [(member.name, member.display_name) for member in cls]


_CATEGORY_DISPLAY_NAMES = {
    Category.CARDIO: "Cardio",
    Category.STRENGTH: "Strength",
    Category.MOBILITY: "Mobility",
    Category.RECOVERY: "Recovery",
    Category.HOME_GYM: "Home Gym",
    Category.ACCESSORIES: "Accessories",
    Category.PLYOMETRICS: "Plyometrics",
    Category.CORE: "Core",
    Category.OUTDOOR: "Outdoor/Functional",
    Category.OTHER: "Other",
}


@dataclass(frozen=True)
class Product:
    """
    A product listed by a user.

    Attributes:
        id: Opaque unique identifier
        name: Display name (never blank)
        price: Positive decimal price
        category: Product category
        owner_id: Id of the listing user
        created_at: Creation instant, never changed by updates
        description: Optional free text, at most 2000 characters
        images: Ordered encoded images, at most three
    """

    id: str
    name: str
    price: Decimal
    category: Category
    owner_id: str
    created_at: datetime
    description: Optional[str] = None
    images: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class User:
    """A registered account. ``email`` is always stored lowercased."""

    id: str
    email: str
    password_hash: str
    first_name: str
    last_name: str
    created_at: datetime
    phone_number: Optional[str] = None


@dataclass(frozen=True)
class Order:
    """
    An order for a quantity of one product.

    ``total_price`` is fixed when the order is placed; later price changes on
    the product do not touch it. ``user_id`` is None for guest orders.
    """

    id: str
    product_id: str
    quantity: int
    total_price: Decimal
    created_at: datetime
    user_id: Optional[str] = None


@dataclass(frozen=True)
class Favorite:
    id: str
    user_id: str
    product_id: str
    created_at: datetime


@dataclass(frozen=True)
class SellerInfo:
    """Public view of a product owner."""

    id: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None


@dataclass(frozen=True)
class ProductDetail:
    """A product together with the public details of its seller."""

    product: Product
    seller: SellerInfo


@dataclass(frozen=True)
class Page:
    """One page of search results plus the total number of matches."""

    items: List[Product]
    total: int
    limit: int
    offset: int

    @property
    def has_next(self) -> bool:
        return self.offset + len(self.items) < self.total
