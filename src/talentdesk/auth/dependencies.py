"""FastAPI dependencies for Supabase authentication and role checks."""

import logging
from datetime import datetime, timezone
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.talentdesk.auth.identity import SupabaseIdentityProvider, get_identity_provider
from src.talentdesk.auth.models import AuthenticatedUser
from src.talentdesk.auth.provisioning import resolve_local_user
from src.talentdesk.services import PostHogService
from src.talentdesk.services.database.models import UserRole
from src.talentdesk.services.database.repository import UserRepository, get_user_repository

# auto_error=False so a missing header produces our 401 body instead of FastAPI's 403
security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    identity_provider: SupabaseIdentityProvider = Depends(get_identity_provider),
    users: UserRepository = Depends(get_user_repository),
) -> AuthenticatedUser:
    """
    Authenticate the request and return the local user record.

    Verifies the bearer token with Supabase, then finds or lazily creates the
    matching local user (see ``resolve_local_user``) and stores it on
    ``request.state.user``.

    Args:
        request: Current request
        credentials: Bearer token from Authorization header
        identity_provider: Supabase token verifier
        users: User repository

    Returns:
        AuthenticatedUser built from the local record

    Raises:
        HTTPException: 401 if the header is missing/malformed or the token is invalid
        HTTPException: 500 if the local record cannot be found or created

    Example:
        @router.get("/me")
        async def get_me(current_user: AuthenticatedUser = Depends(get_current_user)):
            return {"uid": current_user.uid, "email": current_user.email}
    """
    logger.info("Starting authentication process")

    if credentials is None:
        logger.info("No authorization header or invalid format")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: No token provided",
        )

    posthog_service = PostHogService()

    try:
        identity = await identity_provider.verify_token(credentials.credentials)
    except Exception as e:
        # Any provider failure is a rejected token, never a server error
        logger.warning(
            f"Token verification failed: {e}",
            extra={"error_type": "token_verification_failed", "error": str(e)},
        )
        posthog_service.capture(
            distinct_id="anonymous",
            event="authentication_failed",
            properties={"error": "token_verification_failed"},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - Invalid token",
        )

    try:
        user = await resolve_local_user(identity, users)
    except Exception as e:
        logger.error(
            f"Unexpected error during authentication: {e}",
            exc_info=True,
            extra={"uid": identity.id, "error_type": "user_resolution_failed"},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during authentication",
        ) from e

    if user is None:
        logger.error(
            "Failed to create or find user in database",
            extra={"uid": identity.id, "error_type": "user_resolution_failed"},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create or find user record",
        )

    current_user = AuthenticatedUser.from_record(user)
    request.state.user = current_user

    logger.info(f"Authentication successful for user: {current_user.uid} ({current_user.email})")
    posthog_service.capture(
        distinct_id=current_user.uid,
        event="user_authenticated",
        properties={"timestamp": datetime.now(timezone.utc).isoformat(), "email": current_user.email},
    )
    return current_user


def require_role(role: UserRole) -> Callable:
    """
    Build a dependency that authenticates the request and re-checks the
    stored role of the current user.

    Authentication runs through ``get_current_user``, which FastAPI resolves
    once per request even when a route also depends on it directly. The role
    is read from the database rather than trusted from the token so that a
    demotion takes effect on the next request.

    Args:
        role: Role the stored record must hold

    Returns:
        FastAPI dependency returning the AuthenticatedUser with a refreshed role

    Example:
        @router.delete("/{job_id}")
        async def delete_job(admin: AuthenticatedUser = Depends(require_role(UserRole.ADMIN))):
            ...
    """

    async def check_role(
        current_user: AuthenticatedUser = Depends(get_current_user),
        users: UserRepository = Depends(get_user_repository),
    ) -> AuthenticatedUser:
        try:
            user = await users.find_by_uid(current_user.uid)
        except Exception as e:
            logger.error(f"Error checking role for user {current_user.uid}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error checking {role.value} status",
            ) from e

        if user is None:
            logger.info(f"Role check failed: user {current_user.uid} not found in database")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        if user.role != role:
            logger.info(
                f"Role check failed: user {current_user.uid} has role {user.role}, needs {role.value}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not authorized: {role.value.capitalize()} access required",
            )

        current_user.role = user.role
        return current_user

    return check_role


require_admin = require_role(UserRole.ADMIN)
"""Dependency that authenticates the request and requires the admin role."""
