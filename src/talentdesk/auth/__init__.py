"""Authentication module for Supabase-backed authentication."""

from src.talentdesk.auth.dependencies import get_current_user, require_admin, require_role
from src.talentdesk.auth.exceptions import AuthenticationError
from src.talentdesk.auth.identity import SupabaseIdentityProvider, get_identity_provider
from src.talentdesk.auth.models import AuthenticatedUser, IdentityUser
from src.talentdesk.auth.provisioning import resolve_local_user

__all__ = [
    "get_current_user",
    "require_admin",
    "require_role",
    "get_identity_provider",
    "SupabaseIdentityProvider",
    "resolve_local_user",
    "AuthenticationError",
    "AuthenticatedUser",
    "IdentityUser",
]
