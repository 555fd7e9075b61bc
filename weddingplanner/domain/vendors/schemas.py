"""Vendor domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class VendorUpdate(BaseModel):
    """Schema for a vendor editing their own profile"""

    businessName: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None


class VendorResponse(BaseModel):
    """Schema for vendor response"""

    id: int
    businessName: str
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    isApproved: bool
    approvedAt: Optional[datetime] = None
    email: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None


class VendorApprovalResponse(BaseModel):
    message: str
    vendor: VendorResponse
    emailSent: bool


def vendor_to_response(vendor, include_contact: bool = False) -> VendorResponse:
    user = vendor.user
    return VendorResponse(
        id=vendor.id,
        businessName=vendor.business_name,
        description=vendor.description,
        category=vendor.category,
        location=vendor.location,
        phone=vendor.phone if include_contact else None,
        isApproved=vendor.is_approved,
        approvedAt=vendor.approved_at,
        email=user.email if include_contact and user else None,
        firstName=user.first_name if user else None,
        lastName=user.last_name if user else None,
    )
