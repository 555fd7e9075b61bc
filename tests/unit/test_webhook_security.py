import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import HTTPException

from weddingplanner.webhook_security import (
    WebhookSignatureError,
    compute_hmac_sha256,
    verify_chapa_signature,
    verify_chapa_webhook,
)

SECRET = "chapa-webhook-secret"
BODY = b'{"event":"charge.success","tx_ref":"wp-1-abc"}'


class TestVerifyChapaSignature:
    def test_payload_signature(self):
        headers = {"x-chapa-signature": compute_hmac_sha256(SECRET, BODY)}

        assert verify_chapa_signature(SECRET, BODY, headers) is True

    def test_secret_signature(self):
        headers = {"chapa-signature": compute_hmac_sha256(SECRET, SECRET.encode("utf-8"))}

        assert verify_chapa_signature(SECRET, BODY, headers) is True

    def test_tampered_body(self):
        headers = {"x-chapa-signature": compute_hmac_sha256(SECRET, BODY)}

        assert verify_chapa_signature(SECRET, BODY + b" ", headers) is False

    def test_missing_headers(self):
        with pytest.raises(WebhookSignatureError):
            verify_chapa_signature(SECRET, BODY, {})


def _request(headers):
    request = Mock()
    request.body = AsyncMock(return_value=BODY)
    request.headers = headers
    return request


class TestVerifyChapaWebhook:
    def test_valid_request_returns_raw_body(self):
        request = _request({"x-chapa-signature": compute_hmac_sha256(SECRET, BODY)})

        is_valid, raw_body = asyncio.run(verify_chapa_webhook(request, SECRET))

        assert is_valid is True
        assert raw_body == BODY

    def test_unconfigured_secret_is_503(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(verify_chapa_webhook(_request({}), ""))

        assert exc_info.value.status_code == 503

    def test_invalid_signature_is_401(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(verify_chapa_webhook(_request({"x-chapa-signature": "nope"}), SECRET))

        assert exc_info.value.status_code == 401

    def test_no_raise_mode(self):
        is_valid, _ = asyncio.run(
            verify_chapa_webhook(_request({"x-chapa-signature": "nope"}), SECRET, raise_on_failure=False)
        )

        assert is_valid is False
