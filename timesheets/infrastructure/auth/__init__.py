"""
Authentication infrastructure module.
Handles JWT validation, the acting user and the Supabase identity provider.
"""

from .jwt_handler import JWTHandler, InvalidTokenError
from .supabase_auth import SupabaseIdentityProvider
from .dependencies import (
    CurrentActor,
    get_current_actor,
    get_current_user_id,
    get_identity_provider,
    get_jwt_handler,
)

__all__ = [
    "JWTHandler",
    "InvalidTokenError",
    "SupabaseIdentityProvider",
    "CurrentActor",
    "get_current_actor",
    "get_current_user_id",
    "get_identity_provider",
    "get_jwt_handler",
]
