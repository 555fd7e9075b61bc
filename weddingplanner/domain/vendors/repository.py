"""Vendor repository - Database operations for vendors"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Vendor


class VendorRepository:
    """Repository for vendor database operations"""

    @staticmethod
    def get_vendor_by_id(db: Session, vendor_id: int) -> Optional[Vendor]:
        return (
            db.query(Vendor)
            .options(joinedload(Vendor.user))
            .filter(Vendor.id == vendor_id)
            .first()
        )

    @staticmethod
    def get_vendor_by_user_id(db: Session, user_id: int) -> Optional[Vendor]:
        return db.query(Vendor).filter(Vendor.user_id == user_id).first()

    @staticmethod
    def list_vendors(
        db: Session, approved: Optional[bool] = None, category: Optional[str] = None
    ) -> list[Vendor]:
        query = db.query(Vendor).options(joinedload(Vendor.user))
        if approved is not None:
            query = query.filter(Vendor.is_approved == approved)
        if category:
            query = query.filter(Vendor.category == category)
        return query.order_by(Vendor.created_at.desc(), Vendor.id.desc()).all()

    @staticmethod
    def approve_vendor(db: Session, vendor: Vendor) -> Vendor:
        vendor.is_approved = True
        vendor.approved_at = datetime.utcnow()
        db.commit()
        db.refresh(vendor)
        return vendor

    @staticmethod
    def update_vendor(db: Session, vendor: Vendor, **updates) -> Vendor:
        for key, value in updates.items():
            if value is not None and hasattr(vendor, key):
                setattr(vendor, key, value)
        db.commit()
        db.refresh(vendor)
        return vendor
