import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from supabase import AsyncClient, AuthError

from app.exceptions.base_exception import IdentityProviderException

logger = logging.getLogger(__name__)

# Supabase reports an existing account only through the message text
DUPLICATE_ACCOUNT_MARKERS = ("User already registered", "User not allowed")


def classify_auth_error(message: Optional[str]) -> str:
    """Map a provider error message onto an ``IdentityProviderException`` kind."""
    if message and any(marker in message for marker in DUPLICATE_ACCOUNT_MARKERS):
        return IdentityProviderException.DUPLICATE_ACCOUNT
    return IdentityProviderException.OTHER


def to_identity_error(error: AuthError) -> IdentityProviderException:
    message = getattr(error, "message", None) or str(error)
    return IdentityProviderException(message, kind=classify_auth_error(message))


class SupabaseIdentityProvider:
    """
    Thin wrapper over Supabase Auth.

    Every provider failure surfaces as ``IdentityProviderException`` with the
    provider message and a classification, so callers never inspect raw
    provider errors.
    """

    def __init__(
        self,
        admin_client: AsyncClient,
        session_client_factory: Callable[[], Awaitable[AsyncClient]],
    ):
        self.admin_client = admin_client
        self.session_client_factory = session_client_factory

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        client = await self.session_client_factory()
        try:
            response = await client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            raise to_identity_error(e) from e
        if response is None or response.user is None:
            raise IdentityProviderException("Sign in returned no user")
        return response.user.model_dump(mode="json")

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        credentials: Dict[str, Any] = {"email": email, "password": password}
        if metadata:
            credentials["options"] = {"data": metadata}

        client = await self.session_client_factory()
        try:
            response = await client.auth.sign_up(credentials)
        except AuthError as e:
            raise to_identity_error(e) from e
        if response is None or response.user is None:
            raise IdentityProviderException("Sign up returned no user")
        return response.user.model_dump(mode="json")

    async def force_confirm(self, account_id: str) -> None:
        """Mark the account's email as confirmed without the confirmation link."""
        try:
            await self.admin_client.auth.admin.update_user_by_id(
                account_id, {"email_confirm": True}
            )
        except AuthError as e:
            raise to_identity_error(e) from e
