"""Catalog router - FastAPI endpoints for vendor services"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_vendor
from ...database import get_db
from ...models import User
from ...schemas import MessageResponse
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate, service_to_response
from .service import CatalogService

router = APIRouter(tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("/services", response_model=list[ServiceResponse])
async def browse_services(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Browse active services of approved vendors"""
    return [service_to_response(s) for s in catalog.browse(category, search)]


@router.get("/services/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return service_to_response(catalog.get_public_service(service_id))


@router.get("/vendor/services", response_model=list[ServiceResponse])
async def list_my_services(
    user: User = Depends(get_current_vendor),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """All of the current vendor's services, including inactive ones"""
    return [service_to_response(s) for s in catalog.list_my_services(user)]


@router.post("/services", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    user: User = Depends(get_current_vendor),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return service_to_response(catalog.create_service(data, user))


@router.put("/services/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    user: User = Depends(get_current_vendor),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return service_to_response(catalog.update_service(service_id, data, user))


@router.delete("/services/{service_id}", response_model=MessageResponse)
async def delete_service(
    service_id: int,
    user: User = Depends(get_current_vendor),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return catalog.deactivate_service(service_id, user)
