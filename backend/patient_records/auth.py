"""
Auth module: session token signing/verification and the get_current_user FastAPI dependency.

Tokens are stateless HS256 JWTs carrying {id, username, role}. Nothing is stored
server-side, so a token stays valid until its exp claim passes. Every
authenticated role gets the same access; the role is carried but not enforced.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional
from jose import jwt, JWTError
from fastapi import Depends, Request
from patient_records.config import Settings, get_settings
from patient_records.exceptions import MissingToken, InvalidOrExpiredToken

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_EXPIRE_SECONDS = 3600  # 1 hour


@dataclass
class UserPrincipal:
    """Resolved identity attached to each request."""
    id: int
    username: str
    role: str  # "admin" | "doctor" | "nurse" | "receptionist"


def create_token(
    user,
    secret_key: str,
    algorithm: str = ALGORITHM,
    expires_in: int = TOKEN_EXPIRE_SECONDS,
) -> str:
    """Create a signed JWT for the given User model instance."""
    issued_at = int(time.time())
    payload = {
        "id": user.id,
        "username": user.username,
        "role": user.role,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


class AccessGuard:
    """Verifies bearer tokens against the signing secret it was built with."""

    def __init__(self, secret_key: str, algorithm: str = ALGORITHM):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def decode(self, token: str) -> UserPrincipal:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return UserPrincipal(
                id=payload["id"],
                username=payload["username"],
                role=payload["role"],
            )
        except (JWTError, KeyError) as e:
            logger.warning("Rejected session token: %s", e)
            raise InvalidOrExpiredToken()

    def authenticate(self, authorization: Optional[str]) -> UserPrincipal:
        """Resolve an Authorization header value ("Bearer <token>") to a principal."""
        scheme, _, token = (authorization or "").partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise MissingToken()
        return self.decode(token)


async def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> UserPrincipal:
    """
    FastAPI dependency guarding every protected route.
    401 when the header is absent, 403 when the token is bad or expired.
    """
    guard = AccessGuard(settings.jwt_secret_key, settings.jwt_algorithm)
    principal = guard.authenticate(request.headers.get("Authorization"))
    request.state.user = principal
    return principal
