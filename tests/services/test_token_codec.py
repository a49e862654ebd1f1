from datetime import timedelta

import pytest
from jose import jwt

from app.core.exceptions import InvalidToken
from app.core.security import TokenCodec

SECRET = "unit-test-secret"


@pytest.fixture
def codec():
    return TokenCodec(secret_key=SECRET, expire_minutes=60)


@pytest.mark.parametrize("user_id", [1, 42, 987654321])
def test_verify_returns_issued_user_id(codec, user_id):
    assert codec.verify(codec.issue(user_id)) == user_id


def test_token_carries_subject_and_issue_time(codec):
    payload = jwt.decode(codec.issue(7), SECRET, algorithms=["HS256"])
    assert payload["sub"] == "7"
    assert "iat" in payload
    assert "exp" in payload


def test_no_expiry_claim_when_unconfigured():
    codec = TokenCodec(secret_key=SECRET, expire_minutes=None)
    payload = jwt.decode(codec.issue(3), SECRET, algorithms=["HS256"])
    assert "exp" not in payload
    assert codec.verify(codec.issue(3)) == 3


def test_rejects_token_signed_with_other_secret(codec):
    foreign = TokenCodec(secret_key="another-secret").issue(1)
    with pytest.raises(InvalidToken):
        codec.verify(foreign)


def test_rejects_truncated_token(codec):
    token = codec.issue(1)
    with pytest.raises(InvalidToken):
        codec.verify(token[:-5])


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
def test_rejects_malformed_token(codec, garbage):
    with pytest.raises(InvalidToken):
        codec.verify(garbage)


def test_rejects_expired_token(codec):
    token = codec.issue(1, expires_delta=timedelta(seconds=-10))
    with pytest.raises(InvalidToken):
        codec.verify(token)


def test_rejects_payload_without_numeric_subject(codec):
    token = jwt.encode({"sub": "someone@example.com"}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken):
        codec.verify(token)

    missing_sub = jwt.encode({"iat": 0}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken):
        codec.verify(missing_sub)


def test_requires_a_secret():
    with pytest.raises(ValueError):
        TokenCodec(secret_key="")
