"""Payment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class PaymentInitiateRequest(BaseModel):
    """Schema for starting a Chapa checkout for a booking"""

    amount: float
    vendorId: int
    bookingId: int

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("amount must be greater than 0")
        return v


class PaymentInitiateResponse(BaseModel):
    """Checkout link plus the references the storefront keeps for the return trip"""

    checkoutUrl: str
    tx_ref: str
    paymentId: int


class PaymentResponse(BaseModel):
    """Schema for payment response"""

    id: int
    bookingId: int
    vendorId: int
    amount: float
    currency: str
    tx_ref: str
    status: str
    paidAt: Optional[datetime] = None
    created_at: Optional[datetime] = None


class PaymentVerificationResponse(BaseModel):
    status: str
    message: str
    tx_ref: str
    paymentId: int
    bookingId: int
    amount: float


def payment_to_response(payment) -> PaymentResponse:
    return PaymentResponse(
        id=payment.id,
        bookingId=payment.booking_id,
        vendorId=payment.vendor_id,
        amount=payment.amount,
        currency=payment.currency,
        tx_ref=payment.tx_ref,
        status=payment.status,
        paidAt=payment.paid_at,
        created_at=payment.created_at,
    )
