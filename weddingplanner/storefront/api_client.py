"""HTTP client for the marketplace API used by the storefront"""

import logging
from typing import Optional

import httpx

from .. import config
from .storage import TOKEN_KEY, BrowserStorage

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response (or transport failure) from the marketplace API"""

    def __init__(self, status_code: Optional[int], message: str, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload


def _error_message(response: httpx.Response, payload) -> str:
    if isinstance(payload, dict):
        for field in ("message", "detail"):
            value = payload.get(field)
            # Rate limit responses nest the text under detail.message
            if isinstance(value, dict):
                value = value.get("message")
            if isinstance(value, str) and value:
                return value
    return f"Request failed with status code {response.status_code}"


class MarketplaceClient:
    """Thin wrapper over httpx.AsyncClient that attaches the stored bearer token"""

    def __init__(
        self,
        storage: BrowserStorage,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.storage = storage
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.transport = transport
        self.timeout = timeout

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        token = self.storage.get_any(TOKEN_KEY)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs):
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"❌ {method} {path} failed: {e}")
            raise ApiError(None, str(e) or "Network Error") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            raise ApiError(response.status_code, _error_message(response, payload), payload)
        return payload

    async def create_booking(self, booking_data: dict) -> dict:
        """POST /client/bookings -> {message, booking}"""
        return await self._request("POST", "/client/bookings", json=booking_data)

    async def initiate_payment(self, payment_data: dict) -> dict:
        """POST /client/payments/initiate -> {checkoutUrl, tx_ref, paymentId}"""
        return await self._request("POST", "/client/payments/initiate", json=payment_data)

    async def verify_payment(self, tx_ref: str) -> dict:
        return await self._request("GET", f"/client/payments/verify/{tx_ref}")

    async def list_services(self, category: Optional[str] = None, search: Optional[str] = None) -> list:
        params = {k: v for k, v in {"category": category, "search": search}.items() if v}
        return await self._request("GET", "/services", params=params)
