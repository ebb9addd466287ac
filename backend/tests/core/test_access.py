"""Role gate tests."""

import pytest

from coupler.core.access import Principal, require_role, require_self, role_permits
from coupler.core.domain_types import Role
from coupler.core.errors import AuthorizationError


def _principal(role=Role.STUDENT, profile_id="p-1"):
    return Principal(user_id="u-1", email="a@b.nl", role=role, profile_id=profile_id)


def test_empty_allowed_set_permits_any_role():
    assert role_permits(Role.STUDENT, frozenset())
    assert role_permits(Role.REPRESENTATIVE, frozenset())


def test_role_must_be_listed():
    assert role_permits(Role.STUDENT, frozenset({Role.STUDENT}))
    assert not role_permits(Role.STUDENT, frozenset({Role.REPRESENTATIVE}))


def test_require_role_returns_principal():
    principal = _principal(Role.REPRESENTATIVE)
    assert require_role(principal, Role.REPRESENTATIVE) is principal


def test_require_role_rejects_other_role():
    with pytest.raises(AuthorizationError):
        require_role(_principal(Role.STUDENT), Role.REPRESENTATIVE)


def test_require_self_rejects_other_profile():
    with pytest.raises(AuthorizationError):
        require_self(_principal(profile_id="p-1"), "p-2")
    require_self(_principal(profile_id="p-1"), "p-1")
