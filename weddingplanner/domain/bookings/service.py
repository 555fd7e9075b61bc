"""Booking service - Business logic for creating bookings and moving them through their lifecycle"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...email_service import (
    DEFAULT_CANCELLATION_REASON,
    send_booking_cancellation_to_client,
    send_booking_completion_to_client,
    send_booking_confirmation_to_client,
    send_new_booking_to_vendor,
)
from ...models import (
    BOOKING_CANCELLED,
    BOOKING_COMPLETED,
    BOOKING_CONFIRMED,
    BOOKING_PENDING,
    ROLE_ADMIN,
    ROLE_CLIENT,
    ROLE_VENDOR,
    Booking,
    User,
)
from ...services.notification_service import send_notification
from ..catalog.repository import ServiceRepository
from .repository import BookingRepository
from .schemas import BookingCreate, BookingStatusUpdate

logger = logging.getLogger(__name__)

# current status -> statuses a vendor may move it to
ALLOWED_TRANSITIONS = {
    BOOKING_PENDING: {BOOKING_CONFIRMED, BOOKING_CANCELLED},
    BOOKING_CONFIRMED: {BOOKING_COMPLETED, BOOKING_CANCELLED},
    BOOKING_CANCELLED: set(),
    BOOKING_COMPLETED: set(),
}


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.service_repo = ServiceRepository()

    @staticmethod
    def _require_client(user: User):
        if not user.client:
            raise HTTPException(status_code=403, detail="Only client accounts can book services")
        return user.client

    @staticmethod
    def _require_vendor(user: User):
        if not user.vendor:
            raise HTTPException(status_code=403, detail="Only vendor accounts can manage bookings")
        return user.vendor

    async def create_booking(self, data: BookingCreate, user: User) -> Booking:
        """Create a pending booking for an approved vendor's active service"""
        client = self._require_client(user)
        logger.info(f"📥 Creating booking for client {client.id}, service {data.serviceId}")

        service = self.service_repo.get_service_by_id(self.db, data.serviceId)
        if not service or not service.is_active:
            raise HTTPException(status_code=404, detail="Service not found")
        if not service.vendor.is_approved:
            raise HTTPException(
                status_code=400, detail="This vendor is not accepting bookings yet"
            )
        if data.eventDate < datetime.utcnow():
            raise HTTPException(status_code=400, detail="Event date must be in the future")

        booking = self.repo.create_booking(
            self.db,
            service_id=service.id,
            client_id=client.id,
            event_date=data.eventDate,
            location=data.location,
            attendees=data.attendees,
            special_requests=data.specialRequests or "",
            status=BOOKING_PENDING,
        )
        booking = self.repo.get_booking_by_id(self.db, booking.id)
        logger.info(f"✅ Booking {booking.id} created for service {service.id}")

        vendor = booking.service.vendor
        await send_notification(
            "new booking",
            vendor.user.email,
            send_new_booking_to_vendor,
            booking,
            vendor,
        )
        return booking

    def list_client_bookings(self, user: User, status: Optional[str] = None) -> list[Booking]:
        client = self._require_client(user)
        return self.repo.list_client_bookings(self.db, client.id, status)

    def list_vendor_bookings(self, user: User, status: Optional[str] = None) -> list[Booking]:
        vendor = self._require_vendor(user)
        return self.repo.list_vendor_bookings(self.db, vendor.id, status)

    def get_booking(self, booking_id: int, user: User) -> Booking:
        """A booking is visible to its client, the service's vendor and admins"""
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")

        if user.role == ROLE_ADMIN:
            return booking
        if user.role == ROLE_CLIENT and user.client and booking.client_id == user.client.id:
            return booking
        if (
            user.role == ROLE_VENDOR
            and user.vendor
            and booking.service.vendor_id == user.vendor.id
        ):
            return booking
        raise HTTPException(status_code=404, detail="Booking not found")

    async def update_status(
        self, booking_id: int, data: BookingStatusUpdate, user: User
    ) -> Booking:
        """Confirm, cancel or complete a booking and notify the client"""
        vendor = self._require_vendor(user)
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking or booking.service.vendor_id != vendor.id:
            raise HTTPException(status_code=404, detail="Booking not found")

        allowed = ALLOWED_TRANSITIONS.get(booking.status, set())
        if data.status not in allowed:
            raise HTTPException(
                status_code=400,
                detail=f"Cannot change booking status from {booking.status} to {data.status}",
            )

        updates = {"status": data.status}
        if data.status == BOOKING_CANCELLED:
            updates["cancellation_reason"] = (
                data.cancellationReason or ""
            ).strip() or DEFAULT_CANCELLATION_REASON

        previous = booking.status
        booking = self.repo.update_booking(self.db, booking, **updates)
        logger.info(f"✅ Booking {booking.id} moved {previous} -> {booking.status} by vendor {vendor.id}")

        client = booking.client
        if booking.status == BOOKING_CONFIRMED:
            await send_notification(
                "booking confirmed",
                client.user.email,
                send_booking_confirmation_to_client,
                booking,
                client,
            )
        elif booking.status == BOOKING_CANCELLED:
            await send_notification(
                "booking cancelled",
                client.user.email,
                send_booking_cancellation_to_client,
                booking,
                client,
                booking.cancellation_reason,
            )
        elif booking.status == BOOKING_COMPLETED:
            await send_notification(
                "booking completed",
                client.user.email,
                send_booking_completion_to_client,
                booking,
                client,
            )

        return booking
