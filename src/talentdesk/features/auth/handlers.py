"""API handlers for the current user and user administration."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.talentdesk.auth.dependencies import get_current_user, require_admin
from src.talentdesk.auth.models import AuthenticatedUser
from src.talentdesk.features.auth.schemas import UpdateProfileRequest, UpdateRoleRequest
from src.talentdesk.services.database.repository import UserRepository, get_user_repository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=AuthenticatedUser)
async def get_me(current_user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
    """
    Get the authenticated user's local record.

    The record is created on the first authenticated request, so this also
    serves as the sign-in handshake for the frontend.
    """
    return current_user


@router.put("/me", response_model=AuthenticatedUser)
async def update_me(
    payload: UpdateProfileRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> AuthenticatedUser:
    """
    Update the authenticated user's display name.

    Raises:
        HTTPException: 404 if the record no longer exists
        HTTPException: 500 if database error occurs
    """
    try:
        user = await users.find_by_uid(current_user.uid)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        user.name = payload.name
        await users.save(user)
        return AuthenticatedUser.from_record(user)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating profile for user {current_user.uid}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile",
        ) from e


@router.get("/users", response_model=list[AuthenticatedUser])
async def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    admin: AuthenticatedUser = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
) -> list[AuthenticatedUser]:
    """List local user records (admin only)."""
    try:
        records = await users.list_records(skip=skip, limit=limit)
        return [AuthenticatedUser.from_record(user) for user in records]
    except Exception as e:
        logger.error(f"Error listing users: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list users",
        ) from e


@router.patch("/users/{uid}/role", response_model=AuthenticatedUser)
async def update_user_role(
    uid: str,
    payload: UpdateRoleRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
) -> AuthenticatedUser:
    """
    Change another user's role (admin only).

    Raises:
        HTTPException: 400 if an admin tries to change their own role
        HTTPException: 404 if no user has the uid
    """
    if uid == admin.uid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot change their own role",
        )

    try:
        user = await users.find_by_uid(uid)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        user.role = payload.role
        await users.save(user)
        logger.info(f"Role for user {uid} set to {payload.role.value} by {admin.uid}")
        return AuthenticatedUser.from_record(user)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating role for user {uid}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update role",
        ) from e
