"""Payment repository - Database operations for payments"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import PAYMENT_COMPLETED, Booking, Client, Payment, Service, Vendor


def _with_relations(query):
    return query.options(
        joinedload(Payment.vendor).joinedload(Vendor.user),
        joinedload(Payment.booking).joinedload(Booking.service).joinedload(Service.vendor),
        joinedload(Payment.booking).joinedload(Booking.client).joinedload(Client.user),
    )


class PaymentRepository:
    """Repository for payment database operations"""

    @staticmethod
    def get_payment_by_id(db: Session, payment_id: int) -> Optional[Payment]:
        return _with_relations(db.query(Payment)).filter(Payment.id == payment_id).first()

    @staticmethod
    def get_payment_by_tx_ref(db: Session, tx_ref: str) -> Optional[Payment]:
        return _with_relations(db.query(Payment)).filter(Payment.tx_ref == tx_ref).first()

    @staticmethod
    def has_completed_payment(db: Session, booking_id: int) -> bool:
        return (
            db.query(Payment)
            .filter(Payment.booking_id == booking_id, Payment.status == PAYMENT_COMPLETED)
            .first()
            is not None
        )

    @staticmethod
    def list_client_payments(db: Session, client_id: int) -> list[Payment]:
        return (
            db.query(Payment)
            .filter(Payment.client_id == client_id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .all()
        )

    @staticmethod
    def list_vendor_payments(db: Session, vendor_id: int) -> list[Payment]:
        return (
            db.query(Payment)
            .filter(Payment.vendor_id == vendor_id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .all()
        )

    @staticmethod
    def create_payment(db: Session, **payment_data) -> Payment:
        payment = Payment(**payment_data)
        db.add(payment)
        db.commit()
        db.refresh(payment)
        return payment

    @staticmethod
    def update_payment(db: Session, payment: Payment, **updates) -> Payment:
        for key, value in updates.items():
            if hasattr(payment, key):
                setattr(payment, key, value)
        db.commit()
        db.refresh(payment)
        return payment
