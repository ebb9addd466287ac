"""User Service: account lookups, password hashing and verification.

Invariants:
    - new_account only builds a User; it is persisted by the owning aggregate
    - validate_password never raises
"""

import logging

from coupler.core import entities
from coupler.core.domain_types import Role
from coupler.core.errors import EntityNotFoundError, ValidationError
from coupler.core.repository_protocols import UnitOfWorkFactory
from coupler.infrastructure.security import PasswordHasher

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, uow_factory: UnitOfWorkFactory, hasher: PasswordHasher):
        self._uow = uow_factory
        self._hasher = hasher

    async def email_already_used(self, email: str) -> bool:
        async with self._uow() as uow:
            return await uow.users.find_by_email(email) is not None

    async def find_by_email(self, email: str) -> entities.User | None:
        async with self._uow() as uow:
            return await uow.users.find_by_email(email)

    async def find_by_id(self, user_id: str) -> entities.User:
        async with self._uow() as uow:
            user = await uow.users.find_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    def new_account(
        self, email: str, password: str, first_name: str, last_name: str, role: Role,
    ) -> entities.User:
        if not password or not password.strip():
            raise ValidationError("password", "can't be empty")
        return entities.new_user(
            email=email,
            hashed_password=self._hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
        )

    def validate_password(self, hashed_password: str, plaintext: str) -> bool:
        return self._hasher.verify(hashed_password, plaintext)

    async def find_role_id(self, user: entities.User) -> str | None:
        """Id of the student or representative profile that owns `user`."""
        async with self._uow() as uow:
            return await uow.users.find_role_id(user)
