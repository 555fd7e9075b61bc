"""Payment router - FastAPI endpoints for Chapa checkouts and webhooks"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from ... import config
from ...auth import get_current_client, get_current_vendor
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from ...webhook_security import verify_chapa_webhook
from .schemas import (
    PaymentInitiateRequest,
    PaymentInitiateResponse,
    PaymentResponse,
    PaymentVerificationResponse,
    payment_to_response,
)
from .service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"])

initiate_rate_limit = create_rate_limiter(limit=20, window_seconds=300, key_prefix="payment_initiate")
webhook_rate_limit = create_rate_limiter(limit=100, window_seconds=60, key_prefix="chapa_webhook")


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """Dependency injection for PaymentService"""
    return PaymentService(db)


def _verification_response(payment) -> PaymentVerificationResponse:
    messages = {
        "completed": "Payment completed successfully",
        "failed": "Payment failed",
        "pending": "Payment is still pending",
    }
    return PaymentVerificationResponse(
        status=payment.status,
        message=messages.get(payment.status, payment.status),
        tx_ref=payment.tx_ref,
        paymentId=payment.id,
        bookingId=payment.booking_id,
        amount=payment.amount,
    )


# ============================================================================
# CLIENT
# ============================================================================


@router.post("/client/payments/initiate", response_model=PaymentInitiateResponse)
async def initiate_payment(
    data: PaymentInitiateRequest,
    user: User = Depends(get_current_client),
    service: PaymentService = Depends(get_payment_service),
    _: None = Depends(initiate_rate_limit),
):
    """Open a Chapa checkout for one booking - Rate limited to 20 requests per 5 minutes"""
    payment = await service.initiate_payment(data, user)
    return PaymentInitiateResponse(
        checkoutUrl=payment.checkout_url, tx_ref=payment.tx_ref, paymentId=payment.id
    )


@router.get("/client/payments/verify/{tx_ref}", response_model=PaymentVerificationResponse)
async def verify_payment(
    tx_ref: str,
    user: User = Depends(get_current_client),
    service: PaymentService = Depends(get_payment_service),
):
    """Settle a payment after the client returns from the Chapa checkout"""
    payment = await service.verify_payment(tx_ref, user)
    return _verification_response(payment)


@router.get("/client/payments", response_model=list[PaymentResponse])
async def list_my_payments(
    user: User = Depends(get_current_client),
    service: PaymentService = Depends(get_payment_service),
):
    return [payment_to_response(p) for p in service.list_client_payments(user)]


# ============================================================================
# VENDOR
# ============================================================================


@router.get("/vendor/payments", response_model=list[PaymentResponse])
async def list_vendor_payments(
    user: User = Depends(get_current_vendor),
    service: PaymentService = Depends(get_payment_service),
):
    return [payment_to_response(p) for p in service.list_vendor_payments(user)]


# ============================================================================
# GATEWAY
# ============================================================================


@router.get("/payments/callback", response_model=PaymentVerificationResponse)
async def payment_callback(
    trx_ref: Optional[str] = Query(None),
    tx_ref: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    service: PaymentService = Depends(get_payment_service),
):
    """
    Chapa calls this after a checkout finishes.

    The query status is only logged; the payment is settled from Chapa's
    verify endpoint.
    """
    reference = trx_ref or tx_ref
    if not reference:
        raise HTTPException(status_code=400, detail="Missing transaction reference")
    logger.info(f"🔔 Chapa callback tx_ref={reference} status={status}")
    payment = await service.verify_payment(reference)
    return _verification_response(payment)


@router.post("/payments/webhook")
async def chapa_webhook(
    request: Request,
    service: PaymentService = Depends(get_payment_service),
    _: None = Depends(webhook_rate_limit),
):
    """
    Verify signature and apply Chapa charge events.

    Headers:
      - 'x-chapa-signature': hex(hmac_sha256(secret, raw body))
      - 'chapa-signature': hex(hmac_sha256(secret, secret))
    """
    _, raw_body = await verify_chapa_webhook(
        request, config.CHAPA_WEBHOOK_SECRET, raise_on_failure=True
    )

    try:
        payload = json.loads(raw_body.decode("utf-8"))
    except ValueError as e:
        logger.error(f"Failed to parse webhook JSON: {e}")
        raise HTTPException(status_code=400, detail="Invalid JSON payload") from e

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid JSON payload")

    return await service.handle_webhook(payload)
