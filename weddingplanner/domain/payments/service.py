"""Payment service - Business logic for Chapa checkouts, verification and webhooks"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import CHAPA_CALLBACK_URL, CHAPA_CURRENCY, CHAPA_RETURN_URL
from ...email_service import send_payment_completion_to_vendor
from ...models import (
    BOOKING_CANCELLED,
    BOOKING_COMPLETED,
    PAYMENT_COMPLETED,
    PAYMENT_FAILED,
    PAYMENT_PENDING,
    Payment,
    User,
)
from ...services.notification_service import send_notification
from ..bookings.repository import BookingRepository
from .chapa_service import ChapaError, chapa_service
from .repository import PaymentRepository
from .schemas import PaymentInitiateRequest

logger = logging.getLogger(__name__)

AMOUNT_TOLERANCE = 0.01

SUCCESS_EVENTS = {"charge.success"}
FAILURE_EVENTS = {"charge.failed", "charge.cancelled"}


def generate_tx_ref(booking_id: int) -> str:
    """Merchant reference sent to Chapa: unique per attempt, traceable to the booking"""
    return f"wp-{booking_id}-{uuid.uuid4().hex[:16]}"


class PaymentService:
    """Service layer for payment business logic"""

    def __init__(self, db: Session, gateway=None):
        self.db = db
        self.repo = PaymentRepository()
        self.booking_repo = BookingRepository()
        self.gateway = gateway or chapa_service

    def _require_gateway(self):
        if not self.gateway.is_available():
            raise HTTPException(status_code=503, detail="Payment gateway not configured")

    async def initiate_payment(self, data: PaymentInitiateRequest, user: User) -> Payment:
        """Create a pending payment for a booking and open a Chapa checkout for it"""
        client = user.client
        if not client:
            raise HTTPException(status_code=403, detail="Only client accounts can make payments")

        booking = self.booking_repo.get_booking_by_id(self.db, data.bookingId)
        if not booking or booking.client_id != client.id:
            raise HTTPException(status_code=404, detail="Booking not found")

        if booking.status in (BOOKING_CANCELLED, BOOKING_COMPLETED):
            raise HTTPException(
                status_code=400, detail=f"Cannot pay for a {booking.status} booking"
            )

        service = booking.service
        if data.vendorId != service.vendor_id:
            raise HTTPException(status_code=400, detail="Vendor does not match booking")
        if abs(data.amount - service.price) > AMOUNT_TOLERANCE:
            raise HTTPException(status_code=400, detail="Amount does not match service price")

        if self.repo.has_completed_payment(self.db, booking.id):
            raise HTTPException(status_code=409, detail="Booking is already paid")

        self._require_gateway()

        tx_ref = generate_tx_ref(booking.id)
        payment = self.repo.create_payment(
            self.db,
            booking_id=booking.id,
            vendor_id=service.vendor_id,
            client_id=client.id,
            amount=service.price,
            currency=CHAPA_CURRENCY,
            tx_ref=tx_ref,
            status=PAYMENT_PENDING,
        )
        logger.info(f"📥 Payment {payment.id} created for booking {booking.id} ({tx_ref})")

        try:
            checkout = await self.gateway.initialize_transaction(
                amount=payment.amount,
                currency=payment.currency,
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
                phone_number=user.phone,
                tx_ref=tx_ref,
                callback_url=CHAPA_CALLBACK_URL,
                return_url=f"{CHAPA_RETURN_URL}?tx_ref={tx_ref}",
                description=f"Booking {booking.id} {service.name}",
            )
        except ChapaError as e:
            logger.error(f"❌ Chapa initialization failed for {tx_ref}: {e.message}")
            self.repo.update_payment(self.db, payment, status=PAYMENT_FAILED)
            raise HTTPException(status_code=502, detail=f"Payment gateway error: {e.message}") from e

        payment = self.repo.update_payment(self.db, payment, checkout_url=checkout["checkout_url"])
        logger.info(f"✅ Checkout ready for payment {payment.id}")
        return payment

    async def complete_payment(self, payment: Payment, chapa_reference: Optional[str] = None) -> bool:
        """
        Mark a payment completed and notify the vendor.

        Returns False when the payment was already completed, so repeated
        verifications and webhook redeliveries never email twice.
        """
        if payment.status == PAYMENT_COMPLETED:
            logger.info(f"ℹ️ Payment {payment.id} already completed")
            return False

        payment = self.repo.update_payment(
            self.db,
            payment,
            status=PAYMENT_COMPLETED,
            paid_at=datetime.utcnow(),
            chapa_reference=chapa_reference or payment.chapa_reference,
        )
        logger.info(f"✅ Payment {payment.id} completed ({payment.tx_ref})")

        payment = self.repo.get_payment_by_id(self.db, payment.id)
        vendor = payment.vendor
        await send_notification(
            "payment received",
            vendor.user.email,
            send_payment_completion_to_vendor,
            payment,
            payment.booking,
            vendor,
        )
        return True

    def fail_payment(self, payment: Payment) -> Payment:
        if payment.status != PAYMENT_PENDING:
            return payment
        logger.warning(f"⚠️ Payment {payment.id} marked failed ({payment.tx_ref})")
        return self.repo.update_payment(self.db, payment, status=PAYMENT_FAILED)

    async def verify_payment(self, tx_ref: str, user: Optional[User] = None) -> Payment:
        """
        Ask Chapa for the state of a transaction and settle the local payment.

        When a user is given the payment must belong to them; the gateway
        callback verifies without a user.
        """
        payment = self.repo.get_payment_by_tx_ref(self.db, tx_ref)
        if not payment:
            raise HTTPException(status_code=404, detail="Payment not found")
        if user is not None and (not user.client or payment.client_id != user.client.id):
            raise HTTPException(status_code=404, detail="Payment not found")

        if payment.status == PAYMENT_COMPLETED:
            return payment

        self._require_gateway()
        try:
            data = await self.gateway.verify_transaction(tx_ref)
        except ChapaError as e:
            logger.error(f"❌ Chapa verification failed for {tx_ref}: {e.message}")
            raise HTTPException(status_code=502, detail=f"Payment gateway error: {e.message}") from e

        status = (data.get("status") or "").lower()
        if status == "success":
            paid_amount = float(data.get("amount") or 0)
            if paid_amount + AMOUNT_TOLERANCE < payment.amount:
                logger.error(
                    f"❌ Chapa reported {paid_amount} for {tx_ref}, expected {payment.amount}"
                )
                self.fail_payment(payment)
            else:
                await self.complete_payment(payment, data.get("reference"))
        elif status in ("failed", "cancelled"):
            self.fail_payment(payment)
        else:
            logger.info(f"ℹ️ Payment {payment.id} still {status or 'unknown'} at Chapa")

        return self.repo.get_payment_by_tx_ref(self.db, tx_ref)

    async def handle_webhook(self, payload: dict) -> dict:
        """Apply a verified Chapa webhook event to the matching payment"""
        event = payload.get("event") or ""
        status = (payload.get("status") or "").lower()
        tx_ref = payload.get("tx_ref") or payload.get("trx_ref")
        logger.info(f"📥 Chapa webhook event={event or '-'} status={status or '-'} tx_ref={tx_ref}")

        if not tx_ref:
            return {"received": True, "handled": False, "reason": "missing tx_ref"}

        payment = self.repo.get_payment_by_tx_ref(self.db, tx_ref)
        if not payment:
            logger.warning(f"⚠️ Webhook for unknown tx_ref {tx_ref}")
            return {"received": True, "handled": False, "reason": "unknown tx_ref"}

        if event in SUCCESS_EVENTS or (not event and status == "success"):
            completed = await self.complete_payment(payment, payload.get("reference"))
            return {"received": True, "handled": completed}
        if event in FAILURE_EVENTS or (not event and status in ("failed", "cancelled")):
            self.fail_payment(payment)
            return {"received": True, "handled": True}

        logger.info(f"ℹ️ Ignoring Chapa webhook event {event}")
        return {"received": True, "handled": False, "reason": "ignored event"}

    def list_client_payments(self, user: User) -> list[Payment]:
        if not user.client:
            raise HTTPException(status_code=403, detail="Only client accounts have payments")
        return self.repo.list_client_payments(self.db, user.client.id)

    def list_vendor_payments(self, user: User) -> list[Payment]:
        if not user.vendor:
            raise HTTPException(status_code=403, detail="Only vendor accounts receive payments")
        return self.repo.list_vendor_payments(self.db, user.vendor.id)
