"""Booking router - FastAPI endpoints for booking operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_client, get_current_user, get_current_vendor
from ...database import get_db
from ...models import User
from .schemas import (
    BookingCreate,
    BookingCreatedResponse,
    BookingResponse,
    BookingStatusUpdate,
    booking_to_response,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


# ============================================================================
# CLIENT
# ============================================================================


@router.post("/client/bookings", response_model=BookingCreatedResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    user: User = Depends(get_current_client),
    service: BookingService = Depends(get_booking_service),
):
    """Create a booking for a service (called once per cart item at checkout)"""
    booking = await service.create_booking(data, user)
    return BookingCreatedResponse(
        message="Booking created successfully", booking=booking_to_response(booking)
    )


@router.get("/client/bookings", response_model=list[BookingResponse])
async def list_my_bookings(
    status: Optional[str] = Query(None),
    user: User = Depends(get_current_client),
    service: BookingService = Depends(get_booking_service),
):
    return [booking_to_response(b) for b in service.list_client_bookings(user, status)]


# ============================================================================
# VENDOR
# ============================================================================


@router.get("/vendor/bookings", response_model=list[BookingResponse])
async def list_vendor_bookings(
    status: Optional[str] = Query(None),
    user: User = Depends(get_current_vendor),
    service: BookingService = Depends(get_booking_service),
):
    return [booking_to_response(b) for b in service.list_vendor_bookings(user, status)]


@router.patch("/vendor/bookings/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    user: User = Depends(get_current_vendor),
    service: BookingService = Depends(get_booking_service),
):
    """Confirm, cancel or complete a booking"""
    booking = await service.update_status(booking_id, data, user)
    return booking_to_response(booking)


# ============================================================================
# SHARED
# ============================================================================


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return booking_to_response(service.get_booking(booking_id, user))
