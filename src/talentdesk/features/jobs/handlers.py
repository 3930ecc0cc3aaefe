"""API handlers for job posting endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.talentdesk.auth.dependencies import get_current_user, require_admin
from src.talentdesk.auth.models import AuthenticatedUser
from src.talentdesk.features.jobs.schemas import JobCreateRequest, JobResponse, JobUpdateRequest
from src.talentdesk.services.database.models import Job, JobStatus, Vendor
from src.talentdesk.services.database.repository import (
    DocumentRepository,
    get_job_repository,
    get_vendor_repository,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_job_or_404(job_id: str, jobs: DocumentRepository[Job]) -> Job:
    job = await jobs.get(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


async def _ensure_vendor_exists(vendor_id: str | None, vendors: DocumentRepository[Vendor]) -> None:
    if vendor_id is not None and await vendors.get(vendor_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Vendor {vendor_id} does not exist",
        )


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    status_filter: JobStatus | None = Query(None, alias="status"),
    vendor_id: str | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    current_user: AuthenticatedUser = Depends(get_current_user),
    jobs: DocumentRepository[Job] = Depends(get_job_repository),
) -> list[JobResponse]:
    """
    List job postings, newest first.

    Args:
        status_filter: Only return jobs with this status (query param ``status``)
        vendor_id: Only return jobs sourced through this vendor
    """
    filters: dict[str, str] = {}
    if status_filter is not None:
        filters["status"] = status_filter.value
    if vendor_id is not None:
        filters["vendor_id"] = vendor_id

    try:
        records = await jobs.list_records(filters, skip=skip, limit=limit)
        return [JobResponse.model_validate(record) for record in records]
    except Exception as e:
        logger.error(f"Error listing jobs: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch jobs",
        ) from e


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    jobs: DocumentRepository[Job] = Depends(get_job_repository),
) -> JobResponse:
    """Get a single job posting."""
    return JobResponse.model_validate(await _get_job_or_404(job_id, jobs))


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: JobCreateRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    jobs: DocumentRepository[Job] = Depends(get_job_repository),
    vendors: DocumentRepository[Vendor] = Depends(get_vendor_repository),
) -> JobResponse:
    """
    Create a job posting (admin only).

    Raises:
        HTTPException: 400 if vendor_id does not reference an existing vendor
    """
    await _ensure_vendor_exists(payload.vendor_id, vendors)
    try:
        job = await jobs.create({**payload.model_dump(), "created_by": admin.uid})
        logger.info(f"Created job {job.id} by {admin.uid}")
        return JobResponse.model_validate(job)
    except Exception as e:
        logger.error(f"Error creating job: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create job",
        ) from e


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    payload: JobUpdateRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    jobs: DocumentRepository[Job] = Depends(get_job_repository),
    vendors: DocumentRepository[Vendor] = Depends(get_vendor_repository),
) -> JobResponse:
    """Update a job posting (admin only)."""
    job = await _get_job_or_404(job_id, jobs)
    await _ensure_vendor_exists(payload.vendor_id, vendors)
    try:
        changes = payload.model_dump(exclude_unset=True)
        job = await jobs.update(job, changes)
        return JobResponse.model_validate(job)
    except Exception as e:
        logger.error(f"Error updating job {job_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update job",
        ) from e


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    jobs: DocumentRepository[Job] = Depends(get_job_repository),
) -> Response:
    """Delete a job posting (admin only)."""
    job = await _get_job_or_404(job_id, jobs)
    await jobs.delete(job)
    logger.info(f"Deleted job {job_id} by {admin.uid}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
