"""
Security Abstraction Layer
==========================

Password hashing and access token issuing behind abstract interfaces.
"""

from .django_hasher import DjangoPasswordHasher
from .interface import PasswordHasherInterface, TokenIssuerInterface
from .jwt_issuer import JWTTokenIssuer

__all__ = [
    "PasswordHasherInterface",
    "TokenIssuerInterface",
    "DjangoPasswordHasher",
    "JWTTokenIssuer",
]
