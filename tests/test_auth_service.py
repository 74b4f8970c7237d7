# tests/test_auth_service.py
"""Tests for credential issuance and verification."""

from datetime import timedelta

import pytest
from jose import jwt

from ballot_box.core.errors import InvalidCredentialsError, UnauthorizedError
from ballot_box.db.time import utcnow
from ballot_box.schemas.auth import Role
from ballot_box.services import AuthService
from ballot_box.services.auth_service import ADMIN_SUBJECT, TOKEN_AUDIENCE, TOKEN_ISSUER

from tests.conftest import TEST_PASSWORD


def test_login_round_trips_through_verify(auth_service, test_user) -> None:
    token = auth_service.login("testuser", TEST_PASSWORD)

    claims = auth_service.verify(token.access_token)

    assert claims.sub == test_user.id
    assert claims.role is Role.USER
    assert claims.exp == token.valid_until


def test_token_claims_shape(auth_service, test_user, test_settings) -> None:
    token = auth_service.login("testuser", TEST_PASSWORD)

    claims = auth_service.verify(token.access_token)

    assert claims.iss == TOKEN_ISSUER
    assert claims.aud == TOKEN_AUDIENCE
    assert claims.jti == ""
    assert claims.nbf == claims.iat
    assert claims.exp - claims.iat == test_settings.access_token_duration_hours * 3600


def test_login_unknown_user(auth_service) -> None:
    with pytest.raises(InvalidCredentialsError, match="Invalid Credentials"):
        auth_service.login("ghost", TEST_PASSWORD)


def test_login_wrong_password(auth_service, test_user) -> None:
    with pytest.raises(InvalidCredentialsError, match="Invalid Credentials"):
        auth_service.login("testuser", "wrong-password")


def test_login_with_unusable_hash(auth_service, make_user) -> None:
    make_user("broken")  # stored hash is not a bcrypt hash

    with pytest.raises(InvalidCredentialsError):
        auth_service.login("broken", "anything")


def test_login_admin(auth_service, test_settings) -> None:
    token = auth_service.login_admin(test_settings.admin_username, test_settings.admin_password)

    claims = auth_service.verify(token.access_token)

    assert claims.sub == ADMIN_SUBJECT
    assert claims.role is Role.ADMIN


@pytest.mark.parametrize(
    ("username", "password"),
    [("admin", "nope"), ("root", "admin-password"), ("", "")],
)
def test_login_admin_rejects_mismatch(auth_service, username, password) -> None:
    with pytest.raises(InvalidCredentialsError):
        auth_service.login_admin(username, password)


@pytest.mark.parametrize("garbage", ["", "abc", "not.a.jwt", "a.b.c.d"])
def test_verify_rejects_garbage(auth_service, garbage) -> None:
    with pytest.raises(UnauthorizedError):
        auth_service.verify(garbage)


def test_verify_rejects_wrong_secret(auth_service, test_settings) -> None:
    other = AuthService(
        test_settings.model_copy(update={"jwt_secret": "another-secret-that-is-also-32-chars!!"}),
        auth_service.users,
    )
    token = other.issue_token("admin", Role.ADMIN)

    with pytest.raises(UnauthorizedError):
        auth_service.verify(token.access_token)


def test_verify_rejects_expired(test_settings, user_repo) -> None:
    past = utcnow() - timedelta(hours=test_settings.access_token_duration_hours + 1)
    stale = AuthService(test_settings, user_repo, clock=lambda: past)
    token = stale.issue_token("admin", Role.ADMIN)

    with pytest.raises(UnauthorizedError):
        AuthService(test_settings, user_repo).verify(token.access_token)


def test_verify_rejects_not_yet_valid(test_settings, user_repo) -> None:
    future = utcnow() + timedelta(hours=1)
    early = AuthService(test_settings, user_repo, clock=lambda: future)
    token = early.issue_token("admin", Role.ADMIN)

    with pytest.raises(UnauthorizedError):
        AuthService(test_settings, user_repo).verify(token.access_token)


def _signed(test_settings, **overrides) -> str:
    now = int(utcnow().timestamp())
    claims = {
        "sub": "admin",
        "iss": TOKEN_ISSUER,
        "aud": TOKEN_AUDIENCE,
        "iat": now,
        "nbf": now,
        "exp": now + 3600,
        "jti": "",
        "typ": "ADMIN",
    }
    claims.update(overrides)
    return jwt.encode(claims, test_settings.jwt_secret, algorithm=test_settings.jwt_algorithm)


def test_verify_rejects_unknown_role(auth_service, test_settings) -> None:
    with pytest.raises(UnauthorizedError):
        auth_service.verify(_signed(test_settings, typ="ROOT"))


def test_verify_rejects_foreign_audience(auth_service, test_settings) -> None:
    with pytest.raises(UnauthorizedError):
        auth_service.verify(_signed(test_settings, aud="someone-else"))


def test_verify_rejects_foreign_issuer(auth_service, test_settings) -> None:
    with pytest.raises(UnauthorizedError):
        auth_service.verify(_signed(test_settings, iss="someone-else"))


def test_verify_accepts_hand_signed_token(auth_service, test_settings) -> None:
    claims = auth_service.verify(_signed(test_settings))

    assert claims.role is Role.ADMIN
