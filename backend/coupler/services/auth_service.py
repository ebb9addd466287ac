"""Auth Service: credential check and session token issue.

Invariants:
    - Unknown email and wrong password fail with the same AuthenticationError
    - Tokens carry the profile id (student or representative) the user signs in as
"""

import logging
from typing import Any

from coupler.core.access import Principal
from coupler.core.errors import AuthenticationError
from coupler.infrastructure.security import TokenService
from coupler.services.user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, users: UserService, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    async def sign_in(self, email: str, password: str) -> tuple[str, dict[str, Any]]:
        user = await self._users.find_by_email(email)
        if user is None or not self._users.validate_password(user.hashed_password, password):
            logger.warning("Sign-in rejected")
            raise AuthenticationError()
        profile_id = await self._users.find_role_id(user)
        if profile_id is None:
            logger.warning("Sign-in rejected: user has no profile", extra={"user_id": user.id})
            raise AuthenticationError()
        token, claims = self._tokens.issue(user, profile_id)
        logger.info("User signed in", extra={"user_id": user.id})
        return token, claims

    def authenticate(self, token: str) -> Principal:
        return self._tokens.verify(token)
