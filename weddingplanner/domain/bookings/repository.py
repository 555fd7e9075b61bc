"""Booking repository - Database operations for bookings"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Booking, Client, Service, Vendor


def _with_relations(query):
    return query.options(
        joinedload(Booking.service).joinedload(Service.vendor).joinedload(Vendor.user),
        joinedload(Booking.client).joinedload(Client.user),
    )


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int) -> Optional[Booking]:
        return _with_relations(db.query(Booking)).filter(Booking.id == booking_id).first()

    @staticmethod
    def list_client_bookings(
        db: Session, client_id: int, status: Optional[str] = None
    ) -> list[Booking]:
        query = _with_relations(db.query(Booking)).filter(Booking.client_id == client_id)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def list_vendor_bookings(
        db: Session, vendor_id: int, status: Optional[str] = None
    ) -> list[Booking]:
        query = (
            _with_relations(db.query(Booking))
            .join(Service, Booking.service_id == Service.id)
            .filter(Service.vendor_id == vendor_id)
        )
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.event_date.asc(), Booking.id.asc()).all()

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        booking = Booking(**booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def update_booking(db: Session, booking: Booking, **updates) -> Booking:
        for key, value in updates.items():
            if hasattr(booking, key):
                setattr(booking, key, value)
        db.commit()
        db.refresh(booking)
        return booking
