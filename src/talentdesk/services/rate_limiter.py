"""Rate limiting service for API endpoints."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.talentdesk.config import settings


def get_client_key(request: Request) -> str:
    """
    Rate limit key for a request: the client IP address.

    The global limit is enforced by ``SlowAPIMiddleware`` before any route
    dependency runs, so the authenticated user is not known yet and every
    client is limited per address.

    Args:
        request: FastAPI request object

    Returns:
        IP address key
    """
    return f"ip:{get_remote_address(request)}"


# 1000 requests per 15 minutes per client unless configured otherwise
limiter = Limiter(
    key_func=get_client_key,
    default_limits=[settings.rate_limit_default],
    storage_uri="memory://",  # In-memory storage for single-instance deployment
    enabled=settings.rate_limit_enabled,
)
