"""API handlers for resume endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.talentdesk.auth.dependencies import get_current_user
from src.talentdesk.auth.models import AuthenticatedUser
from src.talentdesk.features.resumes.schemas import (
    ResumeCreateRequest,
    ResumeResponse,
    ResumeUpdateRequest,
)
from src.talentdesk.services.database.models import Resume
from src.talentdesk.services.database.repository import DocumentRepository, get_resume_repository

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_owned_resume(
    resume_id: str,
    current_user: AuthenticatedUser,
    resumes: DocumentRepository[Resume],
) -> Resume:
    # Other users' resumes are reported as missing rather than forbidden
    resume = await resumes.get(resume_id)
    if resume is None or (resume.owner_uid != current_user.uid and not current_user.is_admin):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")
    return resume


@router.get("", response_model=list[ResumeResponse])
async def list_resumes(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    current_user: AuthenticatedUser = Depends(get_current_user),
    resumes: DocumentRepository[Resume] = Depends(get_resume_repository),
) -> list[ResumeResponse]:
    """
    List resumes visible to the current user.

    Regular users see their own resumes; admins see every resume.
    """
    filters = {} if current_user.is_admin else {"owner_uid": current_user.uid}
    try:
        records = await resumes.list_records(filters, skip=skip, limit=limit)
        return [ResumeResponse.model_validate(record) for record in records]
    except Exception as e:
        logger.error(f"Error listing resumes for user {current_user.uid}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch resumes",
        ) from e


@router.post("", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
async def create_resume(
    payload: ResumeCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    resumes: DocumentRepository[Resume] = Depends(get_resume_repository),
) -> ResumeResponse:
    """Create a resume owned by the current user."""
    try:
        resume = await resumes.create({**payload.model_dump(), "owner_uid": current_user.uid})
        logger.info(f"Created resume {resume.id} for user {current_user.uid}")
        return ResumeResponse.model_validate(resume)
    except Exception as e:
        logger.error(f"Error creating resume for user {current_user.uid}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create resume",
        ) from e


@router.get("/{resume_id}", response_model=ResumeResponse)
async def get_resume(
    resume_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    resumes: DocumentRepository[Resume] = Depends(get_resume_repository),
) -> ResumeResponse:
    """Get a single resume owned by the current user (or any resume for admins)."""
    resume = await _get_owned_resume(resume_id, current_user, resumes)
    return ResumeResponse.model_validate(resume)


@router.put("/{resume_id}", response_model=ResumeResponse)
async def update_resume(
    resume_id: str,
    payload: ResumeUpdateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    resumes: DocumentRepository[Resume] = Depends(get_resume_repository),
) -> ResumeResponse:
    """Update fields of a resume; omitted fields are left unchanged."""
    resume = await _get_owned_resume(resume_id, current_user, resumes)
    try:
        changes = payload.model_dump(exclude_unset=True)
        resume = await resumes.update(resume, changes)
        return ResumeResponse.model_validate(resume)
    except Exception as e:
        logger.error(f"Error updating resume {resume_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update resume",
        ) from e


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resume(
    resume_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    resumes: DocumentRepository[Resume] = Depends(get_resume_repository),
) -> Response:
    """Delete a resume."""
    resume = await _get_owned_resume(resume_id, current_user, resumes)
    await resumes.delete(resume)
    logger.info(f"Deleted resume {resume_id} for user {current_user.uid}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
