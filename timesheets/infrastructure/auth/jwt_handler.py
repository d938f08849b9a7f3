"""
JWT token handler for Supabase authentication.
Validates access tokens and extracts the user id.
"""

from typing import Dict, Any, Optional
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt as jose_jwt

from timesheets.config import get_settings


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be trusted."""


class JWTHandler:
    """Handles JWT token validation and user extraction."""

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None):
        settings = get_settings()
        self.jwt_secret = secret or settings.supabase_jwt_secret
        self.jwt_algorithm = algorithm or settings.jwt_algorithm

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a Supabase JWT token.

        Raises:
            InvalidTokenError: If token is invalid or expired
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                # Supabase sets aud=authenticated; the audience is not pinned here
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError as e:
            raise InvalidTokenError(f"Invalid JWT token: {str(e)}")

        if 'sub' not in payload:
            raise InvalidTokenError("Token missing user ID (sub claim)")
        if 'exp' not in payload:
            raise InvalidTokenError("Token missing expiration (exp claim)")

        return payload

    def get_user_id(self, token: str) -> str:
        """Extract user ID from JWT token."""
        return self.verify_token(token)['sub']

    def generate_token(self, user_id: str, email: str = "test@example.com", expires_minutes: int = 60) -> str:
        """
        Generate a Supabase-shaped token. Used by tests and local tooling.
        """
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=expires_minutes)

        payload = {
            "sub": user_id,
            "email": email,
            "role": "authenticated",
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
            "aud": "authenticated",
            "iss": "supabase"
        }

        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
