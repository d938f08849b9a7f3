"""
Unit tests for bearer token validation.
"""

import pytest
from jose import jwt

from timesheets.infrastructure.auth.jwt_handler import JWTHandler, InvalidTokenError


SECRET = "unit-test-secret"


class TestJWTHandler:
    """Test cases for JWTHandler."""

    def setup_method(self):
        self.handler = JWTHandler(secret=SECRET, algorithm="HS256")

    def test_round_trip(self):
        token = self.handler.generate_token("user-1", email="u@example.com")
        payload = self.handler.verify_token(token)

        assert payload["sub"] == "user-1"
        assert payload["aud"] == "authenticated"
        assert self.handler.get_user_id(f"Bearer {token}") == "user-1"

    def test_expired_token(self):
        token = self.handler.generate_token("user-1", expires_minutes=-5)
        with pytest.raises(InvalidTokenError):
            self.handler.verify_token(token)

    def test_wrong_secret(self):
        token = JWTHandler(secret="another-secret").generate_token("user-1")
        with pytest.raises(InvalidTokenError):
            self.handler.verify_token(token)

    def test_missing_subject(self):
        token = jwt.encode({"exp": 4102444800}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError, match="sub"):
            self.handler.verify_token(token)

    def test_missing_expiry(self):
        token = jwt.encode({"sub": "user-1"}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError, match="exp"):
            self.handler.verify_token(token)

    def test_garbage(self):
        with pytest.raises(InvalidTokenError):
            self.handler.verify_token("not-a-token")
