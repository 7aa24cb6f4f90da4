"""
JWT Token Issuer
================

TokenIssuerInterface implementation signing HS256 JSON Web Tokens with PyJWT.

Configuration (in settings.py):
    SIMPLE_JWT["SIGNING_KEY"]: HMAC secret (defaults to SECRET_KEY)
    SIMPLE_JWT["ALGORITHM"]: Signing algorithm (default "HS256")
    SIMPLE_JWT["ISSUER"]: Value of the ``iss`` claim
    SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]: timedelta until expiry (default 24 hours)
"""

import logging
from datetime import timedelta
from typing import Any, Callable, Dict, Optional

import jwt
from django.conf import settings
from django.utils import timezone

from marketplace.domain.models import User

from .interface import TokenIssuerInterface

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)


class JWTTokenIssuer(TokenIssuerInterface):
    """
    Issues signed access tokens carrying the user's id and profile claims.

    Args:
        signing_key: HMAC secret (read from settings if None)
        issuer: ``iss`` claim (read from settings if None)
        lifetime: Token validity period (read from settings if None)
        clock: Callable returning the current aware datetime
    """

    def __init__(
        self,
        signing_key: Optional[str] = None,
        issuer: Optional[str] = None,
        lifetime: Optional[timedelta] = None,
        algorithm: Optional[str] = None,
        clock: Callable = timezone.now,
    ):
        jwt_settings = getattr(settings, "SIMPLE_JWT", {})
        self.signing_key = signing_key or jwt_settings.get("SIGNING_KEY") or settings.SECRET_KEY
        self.issuer = issuer or jwt_settings.get("ISSUER", "webshop")
        self.lifetime = lifetime or jwt_settings.get("ACCESS_TOKEN_LIFETIME", DEFAULT_TOKEN_LIFETIME)
        self.algorithm = algorithm or jwt_settings.get("ALGORITHM", "HS256")
        self.clock = clock

    def issue(self, user: User) -> str:
        issued_at = self.clock()
        payload: Dict[str, Any] = {
            "iss": self.issuer,
            "sub": user.id,
            "groups": ["user"],
            "email": user.email,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        token = jwt.encode(payload, self.signing_key, algorithm=self.algorithm)
        logger.debug(f"Issued access token for user {user.id}")
        return token

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a token issued by this issuer.

        Raises:
            jwt.InvalidTokenError: If the signature, issuer or expiry check fails
        """
        return jwt.decode(token, self.signing_key, algorithms=[self.algorithm], issuer=self.issuer)
