"""Access Tokens — issue, verify, header parsing, failure mapping."""

from uuid import uuid4

import jwt
import pytest

from shop.core.errors import AuthenticationError
from shop.core.tokens import create_token, decode_token, extract_token

SECRET = "unit-test-secret"


def test_round_trip_carries_user_id():
    user_id = uuid4()
    payload = decode_token(create_token(user_id, SECRET), SECRET)
    assert payload["_id"] == str(user_id)
    assert payload["exp"] > payload["iat"]


def test_bearer_prefix_accepted():
    token = create_token(uuid4(), SECRET)
    assert extract_token(f"Bearer {token}") == token
    assert decode_token(f"bearer {token}", SECRET)["_id"]


@pytest.mark.parametrize("header", [None, "", "   ", "Bearer "])
def test_missing_token(header):
    with pytest.raises(AuthenticationError, match="missing"):
        extract_token(header)


def test_expired_token():
    token = create_token(uuid4(), SECRET, expiry_days=-1)
    with pytest.raises(AuthenticationError, match="expired"):
        decode_token(token, SECRET)


def test_wrong_secret():
    token = create_token(uuid4(), SECRET)
    with pytest.raises(AuthenticationError, match="Invalid token"):
        decode_token(token, "other-secret")


def test_token_without_user_id_rejected():
    token = jwt.encode({"sub": "x"}, SECRET, algorithm="HS256")
    with pytest.raises(AuthenticationError):
        decode_token(token, SECRET)


def test_failures_are_401():
    with pytest.raises(AuthenticationError) as exc:
        decode_token("garbage", SECRET)
    assert exc.value.http_status == 401
