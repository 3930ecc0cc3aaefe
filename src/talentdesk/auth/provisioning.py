"""Just-in-time provisioning of local user records for verified identities."""

import logging

from pymongo.errors import DuplicateKeyError, PyMongoError

from src.talentdesk.auth.models import IdentityUser
from src.talentdesk.services import PostHogService
from src.talentdesk.services.database.models import User, UserRole
from src.talentdesk.services.database.repository import UserRepository

logger = logging.getLogger(__name__)


async def resolve_local_user(identity: IdentityUser, users: UserRepository) -> User | None:
    """
    Find or create the local user record for a verified identity.

    Resolution order:
    1. Record whose uid matches the Supabase user id
    2. Record with the same email; its uid is re-linked to the Supabase id
    3. New record with the default role

    A duplicate-key error while creating (two first requests racing, or an
    email already stored under another uid) gets one fallback lookup by uid
    or email. Any other database error propagates to the caller.

    Args:
        identity: Identity returned by token verification
        users: User repository

    Returns:
        The local user record, or None if it could neither be found nor created
    """
    user = await users.find_by_uid(identity.id)

    if user is None and identity.email:
        logger.info(f"User not found by uid, trying email: {identity.email}")
        user = await users.find_by_email(identity.email)

        if user is not None:
            logger.info(f"User found by email. Updating uid from {user.uid} to {identity.id}")
            user.uid = identity.id
            await users.save(user)
            PostHogService().capture(
                distinct_id=identity.id,
                event="user_relinked",
                properties={"email": identity.email},
            )

    if user is not None:
        return user

    logger.info("User not found in database, creating new user record")
    try:
        user = await users.create_user(
            uid=identity.id,
            email=identity.email,
            name=identity.display_name,
            role=UserRole.USER,
        )
    except DuplicateKeyError as e:
        logger.warning(
            f"Duplicate key creating user record: {e}",
            extra={"uid": identity.id, "error_type": "user_create_conflict"},
        )
        return await _find_after_conflict(identity, users)

    logger.info("Created new user record", extra={"uid": user.uid, "email": user.email})
    PostHogService().capture(
        distinct_id=identity.id,
        event="user_provisioned",
        properties={"email": identity.email, "name": user.name},
    )
    return user


async def _find_after_conflict(identity: IdentityUser, users: UserRepository) -> User | None:
    try:
        user = await users.find_by_uid_or_email(identity.id, identity.email)
    except PyMongoError as e:
        logger.error(
            f"Fallback user lookup failed: {e}",
            exc_info=True,
            extra={"uid": identity.id, "error_type": "user_fallback_failed"},
        )
        return None

    if user is not None:
        logger.info("Found existing user after creation error", extra={"uid": user.uid})
    return user
