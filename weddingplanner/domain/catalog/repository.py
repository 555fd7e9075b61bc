"""Catalog repository - Database operations for vendor services"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ...models import Service, Vendor


class ServiceRepository:
    """Repository for service database operations"""

    @staticmethod
    def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
        return (
            db.query(Service)
            .options(joinedload(Service.vendor).joinedload(Vendor.user))
            .filter(Service.id == service_id)
            .first()
        )

    @staticmethod
    def list_public_services(
        db: Session, category: Optional[str] = None, search: Optional[str] = None
    ) -> list[Service]:
        """Active services of approved vendors"""
        query = (
            db.query(Service)
            .join(Vendor, Service.vendor_id == Vendor.id)
            .options(joinedload(Service.vendor))
            .filter(Service.is_active.is_(True), Vendor.is_approved.is_(True))
        )
        if category:
            query = query.filter(Service.category == category)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Service.name.ilike(pattern),
                    Service.description.ilike(pattern),
                    Vendor.business_name.ilike(pattern),
                )
            )
        return query.order_by(Service.created_at.desc(), Service.id.desc()).all()

    @staticmethod
    def list_vendor_services(db: Session, vendor_id: int) -> list[Service]:
        return (
            db.query(Service)
            .options(joinedload(Service.vendor))
            .filter(Service.vendor_id == vendor_id)
            .order_by(Service.created_at.desc(), Service.id.desc())
            .all()
        )

    @staticmethod
    def create_service(db: Session, vendor_id: int, **service_data) -> Service:
        service = Service(vendor_id=vendor_id, **service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)
        db.commit()
        db.refresh(service)
        return service
