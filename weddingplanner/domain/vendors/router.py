"""Vendor router - FastAPI endpoints for vendor profiles and approval"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin, get_current_vendor
from ...database import get_db
from ...models import User
from .schemas import VendorApprovalResponse, VendorResponse, VendorUpdate, vendor_to_response
from .service import VendorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Vendors"])


def get_vendor_service(db: Session = Depends(get_db)) -> VendorService:
    """Dependency injection for VendorService"""
    return VendorService(db)


# ============================================================================
# PUBLIC
# ============================================================================


@router.get("/vendors", response_model=list[VendorResponse])
async def list_vendors(
    category: Optional[str] = Query(None),
    service: VendorService = Depends(get_vendor_service),
):
    """List approved vendors"""
    return [vendor_to_response(v) for v in service.list_public_vendors(category)]


# ============================================================================
# VENDOR SELF-SERVICE
# ============================================================================


@router.get("/vendors/me", response_model=VendorResponse)
async def get_my_vendor_profile(
    user: User = Depends(get_current_vendor),
    service: VendorService = Depends(get_vendor_service),
):
    return vendor_to_response(service.get_vendor_for_user(user), include_contact=True)


@router.put("/vendors/me", response_model=VendorResponse)
async def update_my_vendor_profile(
    data: VendorUpdate,
    user: User = Depends(get_current_vendor),
    service: VendorService = Depends(get_vendor_service),
):
    return vendor_to_response(service.update_profile(user, data), include_contact=True)


# ============================================================================
# ADMIN
# ============================================================================


@router.get("/admin/vendors/pending", response_model=list[VendorResponse])
async def list_pending_vendors(
    admin: User = Depends(get_current_admin),
    service: VendorService = Depends(get_vendor_service),
):
    """Vendors waiting for approval"""
    return [vendor_to_response(v, include_contact=True) for v in service.list_pending_vendors()]


@router.post("/admin/vendors/{vendor_id}/approve", response_model=VendorApprovalResponse)
async def approve_vendor(
    vendor_id: int,
    admin: User = Depends(get_current_admin),
    service: VendorService = Depends(get_vendor_service),
):
    """Approve a vendor and send the approval email"""
    vendor, notification = await service.approve_vendor(vendor_id, admin)
    return VendorApprovalResponse(
        message="Vendor approved successfully",
        vendor=vendor_to_response(vendor, include_contact=True),
        emailSent=notification["email_sent"],
    )
