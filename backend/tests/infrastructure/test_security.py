"""Password hashing and session token tests."""

from datetime import datetime, timedelta, timezone

import pytest

from coupler.core.domain_types import Role
from coupler.core.entities import new_user
from coupler.core.errors import AuthenticationError
from coupler.infrastructure.security import PasswordHasher, TokenService


@pytest.fixture
def user():
    return new_user("ann@example.com", "hashed", "Ann", "de Vries", Role.STUDENT)


def test_hash_verifies_and_is_salted():
    hasher = PasswordHasher(rounds=4)
    first, second = hasher.hash("pw"), hasher.hash("pw")
    assert first != second
    assert hasher.verify(first, "pw")
    assert not hasher.verify(first, "other")


@pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$2b$04$short"])
def test_verify_never_raises_on_malformed_hash(bad_hash):
    assert PasswordHasher(rounds=4).verify(bad_hash, "pw") is False


def test_token_round_trip(user):
    tokens = TokenService("secret")
    token, claims = tokens.issue(user, "student-1")
    principal = tokens.verify(token)
    assert principal.user_id == user.id
    assert principal.email == "ann@example.com"
    assert principal.role is Role.STUDENT
    assert principal.profile_id == "student-1"
    assert set(claims) == {"sub", "email", "role", "profile_id", "exp"}


def test_token_lifetime_follows_ttl(user):
    now = datetime.now(timezone.utc).replace(microsecond=0)
    tokens = TokenService("secret", ttl=timedelta(hours=6), clock=lambda: now)
    _, claims = tokens.issue(user, "s-1")
    assert claims["exp"] == int((now + timedelta(hours=6)).timestamp())


def test_expired_token_rejected(user):
    past = datetime.now(timezone.utc) - timedelta(hours=7)
    tokens = TokenService("secret", ttl=timedelta(hours=6), clock=lambda: past)
    token, _ = tokens.issue(user, "s-1")
    with pytest.raises(AuthenticationError):
        tokens.verify(token)


def test_token_signed_with_other_secret_rejected(user):
    token, _ = TokenService("one").issue(user, "s-1")
    with pytest.raises(AuthenticationError):
        TokenService("two").verify(token)


def test_garbage_token_rejected():
    with pytest.raises(AuthenticationError):
        TokenService("secret").verify("not.a.jwt")
