"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from src.talentdesk.auth.exceptions import AuthenticationError
from src.talentdesk.auth.identity import get_identity_provider
from src.talentdesk.auth.models import IdentityUser
from src.talentdesk.main import app
from src.talentdesk.services.database.models import UserRole
from src.talentdesk.services.database.repository import (
    get_job_repository,
    get_resume_repository,
    get_user_repository,
    get_vendor_repository,
)
from src.talentdesk.tests.fakes import (
    ADMIN_TOKEN,
    VALID_TOKEN,
    InMemoryRepository,
    InMemoryUserRepository,
)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    """Provide an empty in-memory user repository."""
    return InMemoryUserRepository()


@pytest.fixture
def identity_provider() -> Mock:
    """
    Mock identity provider accepting VALID_TOKEN and ADMIN_TOKEN.

    Any other token raises AuthenticationError.
    """
    identities = {
        VALID_TOKEN: IdentityUser(
            id="123e4567-e89b-12d3-a456-426614174000",
            email="test@example.com",
            user_metadata={"full_name": "Test User"},
        ),
        ADMIN_TOKEN: IdentityUser(
            id="9b2f7c1a-0d4e-4b8a-9c3e-5f6a7b8c9d0e",
            email="admin@example.com",
            user_metadata={"name": "Admin"},
        ),
    }

    async def verify_token(token: str) -> IdentityUser:
        if token not in identities:
            raise AuthenticationError("Invalid token")
        return identities[token]

    provider = Mock()
    provider.verify_token = AsyncMock(side_effect=verify_token)
    provider.identities = identities
    return provider


@pytest.fixture
def admin_user(user_repository: InMemoryUserRepository, identity_provider: Mock) -> SimpleNamespace:
    """Stored admin record matching ADMIN_TOKEN."""
    identity = identity_provider.identities[ADMIN_TOKEN]
    return user_repository.add(
        uid=identity.id, email=identity.email, name="Admin", role=UserRole.ADMIN
    )


@pytest.fixture
def resume_repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def job_repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def vendor_repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def client(
    identity_provider: Mock,
    user_repository: InMemoryUserRepository,
    resume_repository: InMemoryRepository,
    job_repository: InMemoryRepository,
    vendor_repository: InMemoryRepository,
) -> Iterator[TestClient]:
    """
    Provide FastAPI test client with identity provider and repositories mocked.

    The lifespan is not entered, so no MongoDB connection is made.

    Example:
        >>> def test_health(client):
        >>>     response = client.get("/api/health")
        >>>     assert response.status_code == 200
    """
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    app.dependency_overrides[get_resume_repository] = lambda: resume_repository
    app.dependency_overrides[get_job_repository] = lambda: job_repository
    app.dependency_overrides[get_vendor_repository] = lambda: vendor_repository
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header for the regular test user."""
    return {"Authorization": f"Bearer {VALID_TOKEN}"}


@pytest.fixture
def admin_headers(admin_user: SimpleNamespace) -> dict[str, str]:
    """Authorization header for the stored admin user."""
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
