"""
Django Password Hasher
======================

PasswordHasherInterface implementation using Django's password hashers.
The algorithm is chosen by settings.PASSWORD_HASHERS.
"""

from django.contrib.auth.hashers import check_password, make_password

from .interface import PasswordHasherInterface


class DjangoPasswordHasher(PasswordHasherInterface):
    def hash(self, password: str) -> str:
        return make_password(password)

    def verify(self, password: str, encoded: str) -> bool:
        if not encoded:
            return False
        return check_password(password, encoded)
