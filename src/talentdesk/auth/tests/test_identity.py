"""Tests for Supabase token verification."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

from src.talentdesk.auth import identity as identity_module
from src.talentdesk.auth.exceptions import AuthenticationError
from src.talentdesk.auth.identity import SupabaseIdentityProvider, get_supabase_admin_client


@pytest.fixture
def mock_supabase_client() -> Mock:
    """Mock Supabase client whose auth.get_user returns a user."""
    client = Mock()
    client.auth.get_user.return_value = SimpleNamespace(
        user=SimpleNamespace(
            id="123e4567-e89b-12d3-a456-426614174000",
            email="test@example.com",
            user_metadata={"full_name": "Test User"},
        )
    )
    return client


@pytest.mark.asyncio
class TestSupabaseIdentityProvider:
    """Tests for SupabaseIdentityProvider.verify_token."""

    async def test_valid_token_returns_identity(self, mock_supabase_client):
        provider = SupabaseIdentityProvider(mock_supabase_client)

        identity = await provider.verify_token("token-abc")

        assert identity.id == "123e4567-e89b-12d3-a456-426614174000"
        assert identity.email == "test@example.com"
        assert identity.user_metadata == {"full_name": "Test User"}
        mock_supabase_client.auth.get_user.assert_called_once_with("token-abc")

    async def test_no_user_raises_authentication_error(self, mock_supabase_client):
        mock_supabase_client.auth.get_user.return_value = SimpleNamespace(user=None)
        provider = SupabaseIdentityProvider(mock_supabase_client)

        with pytest.raises(AuthenticationError):
            await provider.verify_token("token-abc")

    async def test_none_response_raises_authentication_error(self, mock_supabase_client):
        mock_supabase_client.auth.get_user.return_value = None
        provider = SupabaseIdentityProvider(mock_supabase_client)

        with pytest.raises(AuthenticationError):
            await provider.verify_token("token-abc")

    async def test_provider_errors_propagate(self, mock_supabase_client):
        mock_supabase_client.auth.get_user.side_effect = RuntimeError("invalid JWT")
        provider = SupabaseIdentityProvider(mock_supabase_client)

        with pytest.raises(RuntimeError):
            await provider.verify_token("token-abc")

    async def test_empty_email_and_metadata_normalized(self, mock_supabase_client):
        mock_supabase_client.auth.get_user.return_value = SimpleNamespace(
            user=SimpleNamespace(id="abc", email="", user_metadata=None)
        )
        provider = SupabaseIdentityProvider(mock_supabase_client)

        identity = await provider.verify_token("token-abc")

        assert identity.email is None
        assert identity.user_metadata == {}


class TestSupabaseClients:
    """Tests for client construction."""

    def test_admin_client_falls_back_to_anon_key(self):
        get_supabase_admin_client.cache_clear()
        with (
            patch.object(identity_module.settings, "supabase_url", "https://proj.supabase.co"),
            patch.object(identity_module.settings, "supabase_service_role_key", ""),
            patch.object(identity_module.settings, "supabase_anon_key", "anon-key"),
            patch.object(identity_module, "create_client") as mock_create,
        ):
            get_supabase_admin_client()

        get_supabase_admin_client.cache_clear()
        args, kwargs = mock_create.call_args
        assert args == ("https://proj.supabase.co", "anon-key")
        assert kwargs["options"].auto_refresh_token is False
        assert kwargs["options"].persist_session is False

    def test_identity_provider_is_singleton(self):
        with (
            patch.object(identity_module, "_identity_provider", None),
            patch.object(identity_module, "get_supabase_admin_client") as mock_admin,
        ):
            first = identity_module.get_identity_provider()
            second = identity_module.get_identity_provider()

        assert first is second
        mock_admin.assert_called_once()
