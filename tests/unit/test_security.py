import jwt
import pytest

from jobboard.config import get_settings
from jobboard.core.errors import UnauthorizedError
from jobboard.core.security import create_access_token, decode_access_token, hash_password, verify_password


def test_password_hash_round_trip() -> None:
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-hash")


def test_token_carries_identity_claims() -> None:
    token = create_access_token({"id": 5, "email": "e@x.com", "role": "employer"})
    payload = decode_access_token(token)
    assert payload["id"] == 5
    assert payload["role"] == "employer"
    assert "exp" in payload


def test_token_signed_with_other_secret_is_rejected() -> None:
    settings = get_settings()
    token = jwt.encode({"id": 1, "role": "employer"}, "other-secret", algorithm=settings.jwt_algorithm)
    with pytest.raises(UnauthorizedError):
        decode_access_token(token)


def test_expired_token_is_rejected() -> None:
    settings = get_settings()
    token = jwt.encode({"id": 1, "role": "employer", "exp": 1}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(UnauthorizedError):
        decode_access_token(token)
