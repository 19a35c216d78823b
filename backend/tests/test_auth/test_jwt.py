"""Unit tests for identity token creation and verification."""

from datetime import timedelta

import pytest
from jose import JWTError, jwt

from housecal.auth.jwt import create_access_token, decode_token
from housecal.config import settings


class TestCreateAccessToken:
    """Tokens shaped like the identity provider's."""

    def test_contains_sub_claim(self):
        payload = decode_token(create_access_token({"sub": "user-abc"}))
        assert payload["sub"] == "user-abc"

    def test_contains_audience_and_role(self):
        payload = decode_token(create_access_token({"sub": "user-123"}))
        assert payload["aud"] == settings.jwt_audience
        assert payload["role"] == "authenticated"

    def test_contains_iat_and_exp(self):
        payload = decode_token(create_access_token({"sub": "user-123"}))
        assert "iat" in payload
        assert "exp" in payload

    def test_keeps_email_claim(self):
        payload = decode_token(create_access_token({"sub": "user-123", "email": "a@test.com"}))
        assert payload["email"] == "a@test.com"

    def test_custom_expiry_delta(self):
        token = create_access_token({"sub": "user-123"}, expires_delta=timedelta(hours=1))
        assert decode_token(token)["sub"] == "user-123"


class TestDecodeToken:
    """Rejection of bad tokens."""

    def test_expired_token(self):
        token = create_access_token({"sub": "user-123"}, expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            decode_token(token)

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "user-123", "aud": settings.jwt_audience}, "other-secret", algorithm="HS256")
        with pytest.raises(JWTError):
            decode_token(token)

    def test_wrong_audience(self):
        token = create_access_token({"sub": "user-123", "aud": "service_role"})
        with pytest.raises(JWTError):
            decode_token(token)

    def test_garbage(self):
        with pytest.raises(JWTError):
            decode_token("not.a.valid.jwt")
