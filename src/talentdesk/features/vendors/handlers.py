"""API handlers for vendor endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.talentdesk.auth.dependencies import get_current_user, require_admin
from src.talentdesk.auth.models import AuthenticatedUser
from src.talentdesk.features.vendors.schemas import (
    VendorCreateRequest,
    VendorResponse,
    VendorUpdateRequest,
)
from src.talentdesk.services.database.models import Vendor
from src.talentdesk.services.database.repository import DocumentRepository, get_vendor_repository

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_vendor_or_404(vendor_id: str, vendors: DocumentRepository[Vendor]) -> Vendor:
    vendor = await vendors.get(vendor_id)
    if vendor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vendor not found")
    return vendor


@router.get("", response_model=list[VendorResponse])
async def list_vendors(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    current_user: AuthenticatedUser = Depends(get_current_user),
    vendors: DocumentRepository[Vendor] = Depends(get_vendor_repository),
) -> list[VendorResponse]:
    """List vendors sorted by name."""
    try:
        records = await vendors.list_records(skip=skip, limit=limit, sort="name")
        return [VendorResponse.model_validate(record) for record in records]
    except Exception as e:
        logger.error(f"Error listing vendors: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch vendors",
        ) from e


@router.get("/{vendor_id}", response_model=VendorResponse)
async def get_vendor(
    vendor_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    vendors: DocumentRepository[Vendor] = Depends(get_vendor_repository),
) -> VendorResponse:
    return VendorResponse.model_validate(await _get_vendor_or_404(vendor_id, vendors))


@router.post("", response_model=VendorResponse, status_code=status.HTTP_201_CREATED)
async def create_vendor(
    payload: VendorCreateRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    vendors: DocumentRepository[Vendor] = Depends(get_vendor_repository),
) -> VendorResponse:
    """Create a vendor (admin only)."""
    try:
        vendor = await vendors.create({**payload.model_dump(), "created_by": admin.uid})
        logger.info(f"Created vendor {vendor.id} by {admin.uid}")
        return VendorResponse.model_validate(vendor)
    except Exception as e:
        logger.error(f"Error creating vendor: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create vendor",
        ) from e


@router.put("/{vendor_id}", response_model=VendorResponse)
async def update_vendor(
    vendor_id: str,
    payload: VendorUpdateRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    vendors: DocumentRepository[Vendor] = Depends(get_vendor_repository),
) -> VendorResponse:
    """Update a vendor (admin only)."""
    vendor = await _get_vendor_or_404(vendor_id, vendors)
    try:
        changes = payload.model_dump(exclude_unset=True)
        vendor = await vendors.update(vendor, changes)
        return VendorResponse.model_validate(vendor)
    except Exception as e:
        logger.error(f"Error updating vendor {vendor_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update vendor",
        ) from e


@router.delete("/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vendor(
    vendor_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    vendors: DocumentRepository[Vendor] = Depends(get_vendor_repository),
) -> Response:
    """Delete a vendor (admin only). Jobs keep their vendor_id reference."""
    vendor = await _get_vendor_or_404(vendor_id, vendors)
    await vendors.delete(vendor)
    logger.info(f"Deleted vendor {vendor_id} by {admin.uid}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
