"""
Webhook Security Module

Signature verification for payment gateway webhooks:
- Constant-time signature comparison
- Raw request body used for verification (never the re-serialized JSON)
"""

import hashlib
import hmac
import logging

from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)


class WebhookSignatureError(Exception):
    """Raised when webhook signature verification fails"""

    pass


def constant_time_compare(a: str, b: str) -> bool:
    """Compare two strings in constant time"""
    if not a or not b:
        return False
    return hmac.compare_digest(a, b)


def compute_hmac_sha256(secret: str, payload: bytes) -> str:
    """Compute HMAC-SHA256 signature of payload"""
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def verify_chapa_signature(secret: str, raw_body: bytes, headers) -> bool:
    """
    Verify a Chapa webhook against its signature headers.

    Chapa sends two headers:
      x-chapa-signature: HMAC-SHA256 of the raw payload keyed by the webhook secret
      chapa-signature:   HMAC-SHA256 of the webhook secret keyed by itself
    Either one matching is accepted.
    """
    payload_signature = headers.get("x-chapa-signature", "")
    secret_signature = headers.get("chapa-signature", "")

    if not payload_signature and not secret_signature:
        raise WebhookSignatureError("Missing webhook signature")

    if payload_signature and constant_time_compare(
        compute_hmac_sha256(secret, raw_body), payload_signature
    ):
        return True

    if secret_signature and constant_time_compare(
        compute_hmac_sha256(secret, secret.encode("utf-8")), secret_signature
    ):
        return True

    return False


async def verify_chapa_webhook(
    request: Request, secret: str, raise_on_failure: bool = True
) -> tuple[bool, bytes]:
    """
    Verify a Chapa webhook request.

    Args:
        request: FastAPI request object
        secret: Webhook secret from the Chapa dashboard
        raise_on_failure: If True, raises HTTPException on failure

    Returns:
        Tuple of (is_valid, raw_body)
    """
    raw_body = await request.body()
    logger.info(f"📥 Chapa webhook received: {len(raw_body)} bytes")

    if not secret:
        logger.error("❌ CHAPA_WEBHOOK_SECRET not configured - rejecting webhook")
        if raise_on_failure:
            raise HTTPException(status_code=503, detail="Webhook verification not configured")
        return False, raw_body

    try:
        is_valid = verify_chapa_signature(secret, raw_body, request.headers)
    except WebhookSignatureError as e:
        logger.error(f"❌ {e}")
        if raise_on_failure:
            raise HTTPException(status_code=401, detail=str(e)) from e
        return False, raw_body

    if not is_valid:
        logger.error("❌ Chapa webhook signature mismatch")
        if raise_on_failure:
            raise HTTPException(status_code=401, detail="Invalid webhook signature")
        return False, raw_body

    logger.info("✅ Chapa webhook signature verified")
    return True, raw_body
