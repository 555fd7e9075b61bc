"""Chapa service - Integration with the Chapa payment gateway API"""

import logging
import re
from typing import Optional

import httpx

from ...config import CHAPA_BASE_URL, CHAPA_SECRET_KEY

logger = logging.getLogger(__name__)

# Chapa rejects customization titles longer than 16 characters and
# descriptions with characters outside this set
CHECKOUT_TITLE = "Wedding Planner"
_DESCRIPTION_DISALLOWED = re.compile(r"[^A-Za-z0-9\-_. ]")


class ChapaError(Exception):
    """Raised when Chapa rejects a request or cannot be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


def sanitize_description(text: str, max_length: int = 50) -> str:
    return _DESCRIPTION_DISALLOWED.sub("", text or "").strip()[:max_length]


class ChapaService:
    """Service for Chapa API operations"""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.secret_key = secret_key if secret_key is not None else CHAPA_SECRET_KEY
        self.base_url = (base_url or CHAPA_BASE_URL).rstrip("/")
        self.transport = transport
        self.timeout = timeout

        if not self.secret_key:
            logger.warning("CHAPA_SECRET_KEY not set; payment endpoints will fail until configured")
        else:
            logger.info(f"Chapa client configured ({self.base_url})")

    def is_available(self) -> bool:
        """Check if the Chapa client is configured"""
        return bool(self.secret_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.secret_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
            transport=self.transport,
        )

    @staticmethod
    def _parse(response: httpx.Response) -> dict:
        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text}
        if not isinstance(body, dict):
            body = {"message": response.text}

        if response.status_code >= 400 or body.get("status") == "failed":
            message = body.get("message") or f"Chapa request failed with HTTP {response.status_code}"
            if isinstance(message, dict):
                # Validation errors come back as {field: [errors]}
                message = "; ".join(
                    f"{field}: {', '.join(errors) if isinstance(errors, list) else errors}"
                    for field, errors in message.items()
                )
            raise ChapaError(str(message), status_code=response.status_code, payload=body)
        return body

    async def initialize_transaction(
        self,
        amount: float,
        email: str,
        first_name: str,
        last_name: Optional[str],
        tx_ref: str,
        callback_url: str,
        return_url: str,
        currency: str = "ETB",
        description: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> dict:
        """Initialize a hosted checkout and return Chapa's data block (checkout_url)"""
        if not self.is_available():
            raise ChapaError("Chapa client not configured")

        payload = {
            "amount": f"{amount:.2f}",
            "currency": currency,
            "email": email,
            "first_name": first_name,
            "last_name": last_name or "",
            "tx_ref": tx_ref,
            "callback_url": callback_url,
            "return_url": return_url,
            "customization": {
                "title": CHECKOUT_TITLE,
                "description": sanitize_description(description or "Wedding service booking"),
            },
        }
        if phone_number:
            payload["phone_number"] = phone_number

        try:
            async with self._client() as client:
                response = await client.post("/transaction/initialize", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach Chapa for {tx_ref}: {e}")
            raise ChapaError(f"Payment gateway unreachable: {e}") from e

        body = self._parse(response)
        data = body.get("data") or {}
        if not data.get("checkout_url"):
            raise ChapaError("Chapa response did not include a checkout URL", payload=body)

        logger.info(f"✅ Chapa transaction initialized: {tx_ref}")
        return data

    async def verify_transaction(self, tx_ref: str) -> dict:
        """Look up a transaction by merchant reference and return Chapa's data block"""
        if not self.is_available():
            raise ChapaError("Chapa client not configured")

        try:
            async with self._client() as client:
                response = await client.get(f"/transaction/verify/{tx_ref}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach Chapa to verify {tx_ref}: {e}")
            raise ChapaError(f"Payment gateway unreachable: {e}") from e

        body = self._parse(response)
        return body.get("data") or {}


# Singleton instance
chapa_service = ChapaService()
