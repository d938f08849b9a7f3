"""
Authentication dependencies for FastAPI.
Resolves the bearer token to the acting user's profile.
"""

import logging
from functools import lru_cache
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from timesheets.domain.models.profile import Actor
from timesheets.domain.services.identity_provider import IdentityProvider
from timesheets.infrastructure.auth.jwt_handler import JWTHandler, InvalidTokenError
from timesheets.infrastructure.auth.supabase_auth import SupabaseIdentityProvider
from timesheets.infrastructure.db.database import get_db
from timesheets.infrastructure.repositories.profile_repository import SQLAlchemyProfileRepository


logger = logging.getLogger(__name__)

# Security scheme; missing credentials are answered with 401 below
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_jwt_handler() -> JWTHandler:
    """Dependency to get JWT handler."""
    return JWTHandler()


@lru_cache()
def get_identity_provider() -> IdentityProvider:
    """Dependency to get the identity provider used for invites."""
    return SupabaseIdentityProvider()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
) -> str:
    """
    FastAPI dependency to get current authenticated user ID.

    Raises:
        HTTPException: If authentication fails
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Missing authorization header")

    try:
        return jwt_handler.get_user_id(credentials.credentials)
    except InvalidTokenError as e:
        raise _unauthorized(str(e))


async def get_current_actor(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)]
) -> Actor:
    """
    FastAPI dependency to get the acting user.
    A valid token without a profile row cannot act on anything.
    """
    profile = SQLAlchemyProfileRepository(db).find_by_id(user_id)
    if profile is None:
        logger.info(f"Authenticated user {user_id} has no profile")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No profile is linked to this account",
        )
    return profile.to_actor()


CurrentActor = Annotated[Actor, Depends(get_current_actor)]
