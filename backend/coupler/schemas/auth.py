"""Auth Schemas: sign-in request and the session it opens."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from coupler.core.domain_types import Role


class SignInRequest(BaseModel):
    email: str
    password: str


class SessionResponse(BaseModel):
    user_id: str
    email: str
    role: Role
    profile_id: str
    expires_at: datetime

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "SessionResponse":
        return cls(
            user_id=claims["sub"],
            email=claims["email"],
            role=Role(claims["role"]),
            profile_id=claims["profile_id"],
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
