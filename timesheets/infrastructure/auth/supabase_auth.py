"""
Supabase identity provider.
Sends member invites through the Supabase admin API.
"""

import logging
from typing import Optional, Dict, Any
from supabase import create_client, Client

from timesheets.config import get_settings
from timesheets.domain.models.base import ValidationError
from timesheets.domain.services.identity_provider import IdentityProvider


logger = logging.getLogger(__name__)


class SupabaseIdentityProvider(IdentityProvider):
    """
    Identity provider backed by Supabase Auth.
    Admin calls need the service role key, never the anon key.
    """

    def __init__(self, client: Optional[Client] = None):
        self.settings = get_settings()
        self._client = client

    @property
    def supabase(self) -> Client:
        if self._client is None:
            self._client = create_client(
                self.settings.supabase_url,
                self.settings.supabase_service_key
            )
        return self._client

    def invite_user(self, email: str, redirect_to: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> str:
        """
        Invite a user by e-mail.

        Returns:
            The Supabase user id of the invited account

        Raises:
            ValidationError: If Supabase rejects the invite
        """
        options: Dict[str, Any] = {"data": data or {}}
        if redirect_to:
            options["redirect_to"] = redirect_to

        try:
            response = self.supabase.auth.admin.invite_user_by_email(email, options)
        except Exception as e:
            logger.warning(f"Supabase invite failed for {email}: {e}")
            raise ValidationError(f"Invite failed: {str(e)}", "email")

        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            raise ValidationError("Invite created but missing user id", "email")

        logger.info(f"Supabase invite sent to {email}")
        return str(user.id)
