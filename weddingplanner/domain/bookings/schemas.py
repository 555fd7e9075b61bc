"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import BOOKING_CANCELLED, BOOKING_COMPLETED, BOOKING_CONFIRMED


def to_naive_utc(value: datetime) -> datetime:
    """Stored datetimes are naive UTC"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class BookingCreate(BaseModel):
    """Schema for creating a booking from a cart item"""

    serviceId: int
    eventDate: datetime
    location: str
    attendees: int
    specialRequests: Optional[str] = ""

    @field_validator("eventDate")
    @classmethod
    def normalize_event_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("location is required")
        return v.strip()

    @field_validator("attendees")
    @classmethod
    def validate_attendees(cls, v: int) -> int:
        if v < 1:
            raise ValueError("attendees must be at least 1")
        return v


class BookingStatusUpdate(BaseModel):
    """Schema for a vendor moving a booking through its lifecycle"""

    status: str
    cancellationReason: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        allowed = {BOOKING_CONFIRMED, BOOKING_CANCELLED, BOOKING_COMPLETED}
        if v not in allowed:
            raise ValueError("status must be one of: confirmed, cancelled, completed")
        return v


class BookingVendor(BaseModel):
    id: int
    businessName: str


class BookingService(BaseModel):
    id: int
    name: str
    price: float
    vendor: BookingVendor


class BookingClient(BaseModel):
    id: int
    firstName: str
    lastName: Optional[str] = None


class BookingResponse(BaseModel):
    """Schema for booking response"""

    id: int
    publicId: str
    eventDate: datetime
    location: str
    attendees: int
    specialRequests: Optional[str] = None
    status: str
    cancellationReason: Optional[str] = None
    service: BookingService
    client: BookingClient
    created_at: Optional[datetime] = None


class BookingCreatedResponse(BaseModel):
    message: str
    booking: BookingResponse


def booking_to_response(booking) -> BookingResponse:
    service = booking.service
    client_user = booking.client.user
    return BookingResponse(
        id=booking.id,
        publicId=booking.public_id,
        eventDate=booking.event_date,
        location=booking.location,
        attendees=booking.attendees,
        specialRequests=booking.special_requests,
        status=booking.status,
        cancellationReason=booking.cancellation_reason,
        service=BookingService(
            id=service.id,
            name=service.name,
            price=service.price,
            vendor=BookingVendor(id=service.vendor.id, businessName=service.vendor.business_name),
        ),
        client=BookingClient(
            id=booking.client.id,
            firstName=client_user.first_name,
            lastName=client_user.last_name,
        ),
        created_at=booking.created_at,
    )
