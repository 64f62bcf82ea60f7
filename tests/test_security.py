# tests/test_security.py

from datetime import timedelta

import pytest
from jose import jwt

from core.security import (
    ExpiredToken,
    Identity,
    InvalidToken,
    TokenService,
    get_password_hash,
    verify_password,
)
from models.user import Role


@pytest.fixture
def service():
    return TokenService(secret="unit-secret")


def test_issue_then_verify_recovers_identity(service):
    token = service.issue("user-1", Role.USER)
    assert service.verify(token) == Identity(user_id="user-1", role=Role.USER)


def test_admin_identity(service):
    identity = service.verify(service.issue("boss", Role.ADMIN))
    assert identity.role is Role.ADMIN
    assert identity.is_admin


def test_default_ttl_is_seven_days(service):
    token = service.issue("user-1", Role.USER)
    claims = jwt.get_unverified_claims(token)
    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())


def test_expired_token_is_rejected(service):
    token = service.issue("user-1", Role.USER, ttl=timedelta(seconds=-10))
    with pytest.raises(ExpiredToken):
        service.verify(token)


def test_token_signed_with_other_secret_is_invalid(service):
    token = TokenService(secret="other-secret").issue("user-1", Role.USER)
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_tampered_payload_is_invalid(service):
    header, _, signature = service.issue("user-1", Role.USER).split(".")
    forged_payload = jwt.encode({"userId": "user-1", "role": "ADMIN"}, "x").split(".")[1]
    with pytest.raises(InvalidToken):
        service.verify(".".join([header, forged_payload, signature]))


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_invalid(service, token):
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_token_without_role_is_invalid(service):
    token = jwt.encode({"userId": "user-1"}, "unit-secret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_token_with_unknown_role_is_invalid(service):
    token = jwt.encode({"userId": "user-1", "role": "ROOT"}, "unit-secret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService(secret="")


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("wrong-pass", hashed)


def test_verify_password_without_hash():
    assert not verify_password("secret1", None)
