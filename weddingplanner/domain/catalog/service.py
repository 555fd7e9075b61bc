"""Catalog service - Business logic for browsing and managing vendor services"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Service, User
from ..vendors.repository import VendorRepository
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()
        self.vendor_repo = VendorRepository()

    def browse(self, category: Optional[str] = None, search: Optional[str] = None) -> list[Service]:
        return self.repo.list_public_services(self.db, category, search)

    def get_public_service(self, service_id: int) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service or not service.is_active or not service.vendor.is_approved:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def _vendor_for(self, user: User):
        vendor = self.vendor_repo.get_vendor_by_user_id(self.db, user.id)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor profile not found")
        return vendor

    def _own_service(self, service_id: int, user: User) -> Service:
        vendor = self._vendor_for(user)
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service or service.vendor_id != vendor.id:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def list_my_services(self, user: User) -> list[Service]:
        vendor = self._vendor_for(user)
        return self.repo.list_vendor_services(self.db, vendor.id)

    def create_service(self, data: ServiceCreate, user: User) -> Service:
        vendor = self._vendor_for(user)
        service = self.repo.create_service(
            self.db,
            vendor.id,
            name=data.name,
            description=data.description,
            category=data.category or vendor.category,
            price=data.price,
        )
        logger.info(f"✅ Vendor {vendor.id} listed service {service.id}: {service.name}")
        return service

    def update_service(self, service_id: int, data: ServiceUpdate, user: User) -> Service:
        service = self._own_service(service_id, user)
        return self.repo.update_service(
            self.db,
            service,
            name=data.name,
            description=data.description,
            category=data.category,
            price=data.price,
            is_active=data.isActive,
        )

    def deactivate_service(self, service_id: int, user: User) -> dict:
        """Services with bookings are kept for history, so delete only deactivates"""
        service = self._own_service(service_id, user)
        service.is_active = False
        self.db.commit()
        logger.info(f"🗑️ Service {service.id} deactivated by vendor {service.vendor_id}")
        return {"message": "Service removed"}
