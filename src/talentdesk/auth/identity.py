"""Supabase identity provider clients and token verification."""

import logging
from functools import lru_cache

from starlette.concurrency import run_in_threadpool
from supabase import Client, ClientOptions, create_client

from src.talentdesk.auth.exceptions import AuthenticationError
from src.talentdesk.auth.models import IdentityUser
from src.talentdesk.config import settings

logger = logging.getLogger(__name__)


def _client_options() -> ClientOptions:
    # Server-side clients never hold a session of their own
    return ClientOptions(auto_refresh_token=False, persist_session=False)


@lru_cache(maxsize=1)
def get_supabase_admin_client() -> Client:
    """
    Get Supabase admin client with service role key (singleton pattern).

    Falls back to the anon key when no service role key is configured.

    ⚠️ WARNING: With the service role key this client has full project access.
    Only use for trusted server-side operations such as token verification.

    Returns:
        Configured Supabase client
    """
    key = settings.supabase_service_role_key or settings.supabase_anon_key
    return create_client(settings.supabase_url, key, options=_client_options())


class SupabaseIdentityProvider:
    """
    Verifies bearer tokens by asking Supabase Auth for the token's user.

    Every call is a network round trip; there is no local signature check
    and no caching of results.

    Example:
        >>> provider = SupabaseIdentityProvider(get_supabase_admin_client())
        >>> identity = await provider.verify_token(token)
        >>> identity.id, identity.email
    """

    def __init__(self, client: Client):
        self.client = client

    async def verify_token(self, token: str) -> IdentityUser:
        """
        Verify a token and return the identity it belongs to.

        Args:
            token: Access token (without "Bearer " prefix)

        Returns:
            Verified identity

        Raises:
            AuthenticationError: If Supabase returns no user for the token
            supabase_auth.errors.AuthError: If Supabase rejects the token
        """
        logger.debug("Verifying token with Supabase")
        response = await run_in_threadpool(self.client.auth.get_user, token)

        supabase_user = response.user if response is not None else None
        if supabase_user is None:
            raise AuthenticationError("No user found for token")

        logger.info(
            "Supabase user verified",
            extra={
                "uid": supabase_user.id,
                "email": supabase_user.email,
                "metadata": supabase_user.user_metadata,
            },
        )

        return IdentityUser(
            id=str(supabase_user.id),
            email=supabase_user.email or None,
            user_metadata=supabase_user.user_metadata or {},
        )


_identity_provider: SupabaseIdentityProvider | None = None


def get_identity_provider() -> SupabaseIdentityProvider:
    """
    Dependency returning the process-wide identity provider.

    The admin client is created on first use so importing the app does not
    require Supabase credentials.
    """
    global _identity_provider

    if _identity_provider is None:
        _identity_provider = SupabaseIdentityProvider(get_supabase_admin_client())
    return _identity_provider
