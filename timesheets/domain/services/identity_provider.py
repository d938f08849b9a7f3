"""
Identity provider interface.
Account creation and invite delivery happen outside the engine.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any


class IdentityProvider(ABC):
    """
    Identity provider interface.
    Defines the account operations the engine needs from the auth service.
    """

    @abstractmethod
    def invite_user(self, email: str, redirect_to: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> str:
        """
        Send an invite e-mail and return the provider's user id.
        Raises ValidationError when the provider rejects the address.
        """
        pass
