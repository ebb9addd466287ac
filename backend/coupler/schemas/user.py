"""User Schemas: the public view of an account (never the password hash)."""

from pydantic import BaseModel, Field

from coupler.core.domain_types import Role
from coupler.core.entities import User


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: Role

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
        )


class AccountFields(BaseModel):
    """Credentials and name shared by every signup payload."""
    email: str = Field(max_length=320)
    password: str
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
