import asyncio
import smtplib
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from weddingplanner import config, email_service
from weddingplanner.email_service import EmailDeliveryError


@pytest.fixture
def smtp_config(monkeypatch):
    monkeypatch.setattr(config, "EMAIL_TRANSPORT", "smtp")
    monkeypatch.setattr(config, "EMAIL_HOST", "smtp.example.com")
    monkeypatch.setattr(config, "EMAIL_PORT", 587)
    monkeypatch.setattr(config, "EMAIL_SECURE", False)
    monkeypatch.setattr(config, "EMAIL_USER", "mailer")
    monkeypatch.setattr(config, "EMAIL_PASSWORD", "secret")
    monkeypatch.setattr(config, "EMAIL_FROM", '"Wedding Planner" <noreply@weddingplanner.com>')


@pytest.fixture
def compiled():
    with patch.object(email_service, "compile_mjml_to_html", return_value="<html>ok</html>") as mock:
        yield mock


def _send():
    return asyncio.run(
        email_service.send_email(to="vendor@example.com", subject="Hello", mjml_content="<mjml/>")
    )


class TestSendEmail:
    def test_smtp_sends_once(self, smtp_config, compiled):
        with patch.object(email_service.smtplib, "SMTP") as smtp_cls:
            server = smtp_cls.return_value
            server.has_extn.return_value = True

            info = _send()

        assert info["transport"] == "smtp"
        smtp_cls.assert_called_once_with("smtp.example.com", 587, timeout=30)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "secret")
        server.sendmail.assert_called_once()
        args = server.sendmail.call_args.args
        assert args[0] == "noreply@weddingplanner.com"
        assert args[1] == ["vendor@example.com"]
        server.quit.assert_called_once()

    def test_secure_uses_ssl(self, smtp_config, compiled, monkeypatch):
        monkeypatch.setattr(config, "EMAIL_SECURE", True)
        monkeypatch.setattr(config, "EMAIL_PORT", 465)

        with patch.object(email_service.smtplib, "SMTP_SSL") as ssl_cls:
            _send()

        ssl_cls.assert_called_once()
        ssl_cls.return_value.sendmail.assert_called_once()
        ssl_cls.return_value.starttls.assert_not_called()

    def test_rejection_propagates(self, smtp_config, compiled):
        with patch.object(email_service.smtplib, "SMTP") as smtp_cls:
            server = smtp_cls.return_value
            server.sendmail.side_effect = smtplib.SMTPRecipientsRefused(
                {"vendor@example.com": (550, b"no such user")}
            )

            with pytest.raises(EmailDeliveryError):
                _send()

        server.sendmail.assert_called_once()
        server.quit.assert_called_once()

    def test_missing_host(self, smtp_config, compiled, monkeypatch):
        monkeypatch.setattr(config, "EMAIL_HOST", None)

        with pytest.raises(EmailDeliveryError):
            _send()

    def test_resend_transport(self, compiled, monkeypatch):
        monkeypatch.setattr(config, "EMAIL_TRANSPORT", "resend")
        monkeypatch.setattr(config, "RESEND_API_KEY", "re_test")

        with patch.object(email_service.resend.Emails, "send", return_value={"id": "re_123"}) as send:
            info = _send()

        assert info == {"id": "re_123", "transport": "resend"}
        payload = send.call_args.args[0]
        assert payload["to"] == ["vendor@example.com"]
        assert payload["html"] == "<html>ok</html>"

    def test_compile_failure_is_delivery_error(self):
        with patch.object(email_service, "mjml_to_html", side_effect=RuntimeError("bad xml")):
            with pytest.raises(EmailDeliveryError):
                email_service.compile_mjml_to_html("<mjml>")

    def test_compile_reads_html_from_result(self):
        with patch.object(email_service, "mjml_to_html", return_value={"html": "<html/>", "errors": []}):
            assert email_service.compile_mjml_to_html("<mjml/>") == "<html/>"


def _entities():
    vendor_user = SimpleNamespace(first_name="Abebe", email="vendor@example.com")
    vendor = SimpleNamespace(id=7, user=vendor_user, business_name="Addis Blooms")
    client_user = SimpleNamespace(first_name="Hana", email="client@example.com", full_name="Hana Bekele")
    client = SimpleNamespace(id=3, user=client_user)
    service = SimpleNamespace(name="Bridal Bouquet", vendor=vendor)
    booking = SimpleNamespace(
        id=11,
        service=service,
        client=client,
        event_date=datetime(2027, 6, 14, 15, 0),
        location="Addis Ababa",
        status="pending",
    )
    payment = SimpleNamespace(id=21, amount=2500.0, currency="ETB")
    return vendor, client, booking, payment


@pytest.fixture
def send_email():
    with patch.object(email_service, "send_email", new_callable=AsyncMock) as mock:
        mock.return_value = {"id": "1", "transport": "smtp"}
        yield mock


class TestLifecycleEmails:
    def test_vendor_approval(self, send_email):
        vendor, _, _, _ = _entities()

        asyncio.run(email_service.send_vendor_approval_email(vendor))

        send_email.assert_awaited_once()
        kwargs = send_email.await_args.kwargs
        assert kwargs["to"] == "vendor@example.com"
        assert kwargs["subject"] == "Your Vendor Account Has Been Approved!"
        assert "Hello Abebe" in kwargs["mjml_content"]
        assert "Addis Blooms" in kwargs["mjml_content"]

    def test_payment_completion(self, send_email):
        vendor, _, booking, payment = _entities()

        asyncio.run(email_service.send_payment_completion_to_vendor(payment, booking, vendor))

        kwargs = send_email.await_args.kwargs
        assert kwargs["subject"] == "Payment Received for Booking"
        content = kwargs["mjml_content"]
        assert "ETB 2,500" in content
        assert "Hana Bekele" in content
        assert "June 14, 2027" in content
        assert "/dashboard/bookings/11/show" in content

    def test_new_booking(self, send_email):
        vendor, _, booking, _ = _entities()

        asyncio.run(email_service.send_new_booking_to_vendor(booking, vendor))

        kwargs = send_email.await_args.kwargs
        assert kwargs["to"] == "vendor@example.com"
        assert kwargs["subject"] == "New Booking Received"
        assert "Addis Ababa" in kwargs["mjml_content"]

    def test_booking_confirmed(self, send_email):
        _, client, booking, _ = _entities()

        asyncio.run(email_service.send_booking_confirmation_to_client(booking, client))

        kwargs = send_email.await_args.kwargs
        assert kwargs["to"] == "client@example.com"
        assert kwargs["subject"] == "Your Booking Has Been Confirmed!"
        assert "Bridal Bouquet" in kwargs["mjml_content"]

    def test_booking_cancelled_with_default_reason(self, send_email):
        _, client, booking, _ = _entities()

        asyncio.run(email_service.send_booking_cancellation_to_client(booking, client))

        kwargs = send_email.await_args.kwargs
        assert kwargs["subject"] == "Your Booking Has Been Cancelled"
        assert "No reason provided" in kwargs["mjml_content"]

    def test_booking_cancelled_with_reason(self, send_email):
        _, client, booking, _ = _entities()

        asyncio.run(
            email_service.send_booking_cancellation_to_client(booking, client, "Double booked")
        )

        assert "Double booked" in send_email.await_args.kwargs["mjml_content"]

    def test_booking_completed(self, send_email):
        _, client, booking, _ = _entities()

        asyncio.run(email_service.send_booking_completion_to_client(booking, client))

        send_email.assert_awaited_once()
        assert send_email.await_args.kwargs["subject"] == "Your Booking Has Been Completed"

    def test_transport_rejection_propagates_from_sender(self, send_email):
        vendor, _, _, _ = _entities()
        send_email.side_effect = EmailDeliveryError("rejected")

        with pytest.raises(EmailDeliveryError):
            asyncio.run(email_service.send_vendor_approval_email(vendor))


class TestNotificationDispatch:
    def test_failures_are_reported_not_raised(self):
        from weddingplanner.services.notification_service import send_notification

        failing = AsyncMock(side_effect=EmailDeliveryError("SMTP down"))

        result = asyncio.run(send_notification("test", "a@example.com", failing, 1))

        assert result == {"email_sent": False, "email_error": "SMTP down"}
        failing.assert_awaited_once_with(1)

    def test_missing_recipient_skips(self):
        from weddingplanner.services.notification_service import send_notification

        sender = AsyncMock()

        result = asyncio.run(send_notification("test", None, sender))

        assert result["email_sent"] is False
        sender.assert_not_awaited()
