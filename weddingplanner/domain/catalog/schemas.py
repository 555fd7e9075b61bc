"""Catalog domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class ServiceCreate(BaseModel):
    """Schema for a vendor listing a new service"""

    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: float

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("price must be greater than 0")
        return v


class ServiceUpdate(BaseModel):
    """Schema for updating a service"""

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    isActive: Optional[bool] = None

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("price must be greater than 0")
        return v


class ServiceVendor(BaseModel):
    id: int
    businessName: str


class ServiceResponse(BaseModel):
    """Schema for service response"""

    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: float
    isActive: bool
    vendor: ServiceVendor
    vendorName: str
    created_at: Optional[datetime] = None


def service_to_response(service) -> ServiceResponse:
    return ServiceResponse(
        id=service.id,
        name=service.name,
        description=service.description,
        category=service.category,
        price=service.price,
        isActive=service.is_active,
        vendor=ServiceVendor(id=service.vendor.id, businessName=service.vendor.business_name),
        vendorName=service.vendor.business_name,
        created_at=service.created_at,
    )
