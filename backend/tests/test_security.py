import jwt
import pytest

from places_api.core.config import settings
from places_api.core.errors import AuthorizationError
from places_api.core.security import create_access_token, decode_access_token


def test_token_round_trip():
    token = create_access_token("64b7f0c2a1b2c3d4e5f60718", "max@example.com")

    payload = decode_access_token(token)

    assert payload["userId"] == "64b7f0c2a1b2c3d4e5f60718"
    assert payload["email"] == "max@example.com"


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"userId": "u1"}, "a-completely-different-signing-key", algorithm=settings.JWT_ALGORITHM)

    with pytest.raises(AuthorizationError):
        decode_access_token(token)


def test_expired_token_is_rejected():
    token = create_access_token("u1", "max@example.com", expires_minutes=-1)

    with pytest.raises(AuthorizationError):
        decode_access_token(token)


def test_zero_minute_token_is_already_expired():
    token = create_access_token("u1", "max@example.com", expires_minutes=0)

    with pytest.raises(AuthorizationError):
        decode_access_token(token)
