"""Access Rules: role-based gating over the closed Role enum.

Invariants:
    - Roles are matched exhaustively; an unknown role is never allowed
    - An empty `allowed` set means "any authenticated account"
"""

from dataclasses import dataclass

from coupler.core.domain_types import Role
from coupler.core.errors import AuthorizationError


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, decoded from a session token."""
    user_id: str
    email: str
    role: Role
    profile_id: str


def role_permits(role: Role, allowed: frozenset[Role]) -> bool:
    if not allowed:
        return True
    match role:
        case Role.STUDENT:
            return Role.STUDENT in allowed
        case Role.REPRESENTATIVE:
            return Role.REPRESENTATIVE in allowed
        case _:
            return False


def require_role(principal: Principal, *allowed: Role) -> Principal:
    if not role_permits(principal.role, frozenset(allowed)):
        raise AuthorizationError(
            f"role '{principal.role.value}' may not perform this operation",
        )
    return principal


def require_self(principal: Principal, profile_id: str) -> Principal:
    """Only the owner of a profile may change it."""
    if principal.profile_id != profile_id:
        raise AuthorizationError("can only modify your own profile")
    return principal
