"""Security: bcrypt password hashing (passlib) and session tokens (python-jose).

Invariants:
    - Plaintext passwords are never stored or logged
    - PasswordHasher.verify never raises: malformed hashes are simply a mismatch
    - TokenService.verify raises AuthenticationError for any bad, expired or incomplete token
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from jose import JWTError, jwt
from passlib.context import CryptContext

from coupler.core.access import Principal
from coupler.core.domain_types import Role
from coupler.core.entities import User
from coupler.core.errors import AuthenticationError

logger = logging.getLogger(__name__)


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, hashed: str, plaintext: str) -> bool:
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            return False


class TokenService:
    """Signs and checks the JWT carried in the session cookie."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=6),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    def issue(self, user: User, profile_id: str) -> tuple[str, dict[str, Any]]:
        expires = self._clock() + self.ttl
        claims = {
            "sub": user.id,
            "email": user.email,
            "role": user.role.value,
            "profile_id": profile_id,
            "exp": int(expires.timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm), claims

    def verify(self, token: str) -> Principal:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
            return Principal(
                user_id=claims["sub"],
                email=claims["email"],
                role=Role(claims["role"]),
                profile_id=claims["profile_id"],
            )
        except (JWTError, KeyError, ValueError) as e:
            logger.warning(f"Session token rejected: {e}")
            raise AuthenticationError("invalid or expired session") from e
