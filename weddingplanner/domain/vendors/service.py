"""Vendor service - Business logic for vendor accounts and approval"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...email_service import send_vendor_approval_email
from ...models import User, Vendor
from ...services.notification_service import send_notification
from .repository import VendorRepository
from .schemas import VendorUpdate

logger = logging.getLogger(__name__)


class VendorService:
    """Service layer for vendor business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = VendorRepository()

    def list_public_vendors(self, category: Optional[str] = None) -> list[Vendor]:
        """Approved vendors only"""
        return self.repo.list_vendors(self.db, approved=True, category=category)

    def list_pending_vendors(self) -> list[Vendor]:
        return self.repo.list_vendors(self.db, approved=False)

    def get_vendor(self, vendor_id: int) -> Vendor:
        vendor = self.repo.get_vendor_by_id(self.db, vendor_id)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor not found")
        return vendor

    def get_vendor_for_user(self, user: User) -> Vendor:
        vendor = self.repo.get_vendor_by_user_id(self.db, user.id)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor profile not found")
        return vendor

    def update_profile(self, user: User, data: VendorUpdate) -> Vendor:
        vendor = self.get_vendor_for_user(user)
        return self.repo.update_vendor(
            self.db,
            vendor,
            business_name=data.businessName,
            description=data.description,
            category=data.category,
            location=data.location,
            phone=data.phone,
        )

    async def approve_vendor(self, vendor_id: int, admin: User) -> tuple[Vendor, dict]:
        """Approve a vendor so they can receive bookings, then email them"""
        vendor = self.get_vendor(vendor_id)
        if vendor.is_approved:
            raise HTTPException(status_code=409, detail="Vendor is already approved")

        vendor = self.repo.approve_vendor(self.db, vendor)
        logger.info(f"✅ Vendor {vendor.id} ({vendor.business_name}) approved by admin {admin.id}")

        notification = await send_notification(
            "vendor approval",
            vendor.user.email,
            send_vendor_approval_email,
            vendor,
        )
        return vendor, notification
