"""
Security Interfaces
===================

Abstract contracts for the credential collaborators used by the auth service:
password hashing and session token issuing.
"""

from abc import ABC, abstractmethod

from marketplace.domain.models import User


class PasswordHasherInterface(ABC):
    """Hashes plaintext passwords and verifies them against stored hashes."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Args:
            password: Plaintext password

        Returns:
            Encoded hash string safe to persist
        """
        pass

    @abstractmethod
    def verify(self, password: str, encoded: str) -> bool:
        """Return True if ``password`` matches the stored hash."""
        pass


class TokenIssuerInterface(ABC):
    """Issues opaque bearer tokens for authenticated users."""

    @abstractmethod
    def issue(self, user: User) -> str:
        pass
