"""
Transactional Email Service using SMTP (default) or Resend
Templates are written in MJML and compiled to HTML before sending.
Each send is a single attempt; failures propagate to the caller.
"""

import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid, parseaddr
from typing import Optional, Union

import resend
from mjml import mjml2html as mjml_to_html

from . import config
from .email_templates import (
    booking_cancelled_template,
    booking_completed_template,
    booking_confirmed_template,
    new_booking_template,
    payment_received_template,
    vendor_approval_template,
)

logger = logging.getLogger(__name__)

DEFAULT_CANCELLATION_REASON = "No reason provided"


class EmailDeliveryError(Exception):
    """Raised when the outbound transport rejects a message"""

    pass


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        # mjml_to_html returns a dict with 'html' and 'errors' keys
        if isinstance(result, dict):
            if result.get("errors"):
                logger.warning(f"MJML compilation warnings: {result['errors']}")
            return result.get("html", "")
        return str(result)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailDeliveryError(f"Failed to compile MJML template: {str(e)}") from e


def send_via_smtp(
    to: list[str],
    subject: str,
    html_content: str,
    from_address: str,
) -> dict:
    """Send an HTML email through the SMTP server configured in the environment"""
    if not config.EMAIL_HOST:
        raise EmailDeliveryError("EMAIL_HOST is not configured")

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = from_address
    msg["To"] = ", ".join(to)
    message_id = make_msgid(domain=parseaddr(from_address)[1].split("@")[-1] or None)
    msg["Message-ID"] = message_id
    msg.attach(MIMEText(html_content, "html"))

    context = ssl.create_default_context()
    if config.EMAIL_SECURE:
        server = smtplib.SMTP_SSL(config.EMAIL_HOST, config.EMAIL_PORT, context=context, timeout=30)
    else:
        server = smtplib.SMTP(config.EMAIL_HOST, config.EMAIL_PORT, timeout=30)

    try:
        if not config.EMAIL_SECURE:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls(context=context)
                server.ehlo()
        if config.EMAIL_USER:
            server.login(config.EMAIL_USER, config.EMAIL_PASSWORD or "")
        server.sendmail(parseaddr(from_address)[1], to, msg.as_string())
    finally:
        server.quit()

    return {"id": message_id, "transport": "smtp"}


def send_via_resend(
    to: list[str],
    subject: str,
    html_content: str,
    from_address: str,
) -> dict:
    """Send an HTML email through the Resend API"""
    if not config.RESEND_API_KEY:
        raise EmailDeliveryError("RESEND_API_KEY is not configured")

    resend.api_key = config.RESEND_API_KEY
    response = resend.Emails.send(
        {
            "from": from_address,
            "to": to,
            "subject": subject,
            "html": html_content,
        }
    )
    return {"id": response.get("id") if isinstance(response, dict) else None, "transport": "resend"}


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email using the configured transport

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address

    Returns:
        Send response dict with the message id
    """
    html_content = compile_mjml_to_html(mjml_content)

    recipients = [to] if isinstance(to, str) else to
    sender = from_address or config.EMAIL_FROM
    transport = send_via_resend if config.EMAIL_TRANSPORT == "resend" else send_via_smtp

    try:
        logger.info(f"📧 Sending email via {config.EMAIL_TRANSPORT} to: {recipients}")
        info = transport(
            to=recipients,
            subject=subject,
            html_content=html_content,
            from_address=sender,
        )
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        if isinstance(e, EmailDeliveryError):
            raise
        raise EmailDeliveryError(f"Failed to send email: {str(e)}") from e

    logger.info(f"✅ Email sent: {info.get('id')}")
    return info


# ============================================
# Lifecycle notifications
# ============================================


async def send_vendor_approval_email(vendor) -> dict:
    """Tell a vendor their account has been approved"""
    mjml_content = vendor_approval_template(
        first_name=vendor.user.first_name,
        business_name=vendor.business_name,
    )
    return await send_email(
        to=vendor.user.email,
        subject="Your Vendor Account Has Been Approved!",
        mjml_content=mjml_content,
    )


async def send_payment_completion_to_vendor(payment, booking, vendor) -> dict:
    """Tell a vendor a client has paid for one of their bookings"""
    mjml_content = payment_received_template(
        first_name=vendor.user.first_name,
        service_name=booking.service.name,
        client_name=booking.client.user.full_name,
        amount=payment.amount,
        currency=payment.currency or "ETB",
        event_date=booking.event_date,
        payment_id=payment.id,
        booking_id=booking.id,
    )
    return await send_email(
        to=vendor.user.email,
        subject="Payment Received for Booking",
        mjml_content=mjml_content,
    )


async def send_new_booking_to_vendor(booking, vendor) -> dict:
    """Tell a vendor about a new booking of their service"""
    mjml_content = new_booking_template(
        first_name=vendor.user.first_name,
        service_name=booking.service.name,
        client_name=booking.client.user.full_name,
        event_date=booking.event_date,
        location=booking.location,
        status=booking.status,
        booking_id=booking.id,
    )
    return await send_email(
        to=vendor.user.email,
        subject="New Booking Received",
        mjml_content=mjml_content,
    )


async def send_booking_confirmation_to_client(booking, client) -> dict:
    """Tell a client the vendor confirmed their booking"""
    mjml_content = booking_confirmed_template(
        first_name=client.user.first_name,
        service_name=booking.service.name,
        event_date=booking.event_date,
        location=booking.location,
    )
    return await send_email(
        to=client.user.email,
        subject="Your Booking Has Been Confirmed!",
        mjml_content=mjml_content,
    )


async def send_booking_cancellation_to_client(
    booking, client, cancellation_reason: Optional[str] = None
) -> dict:
    """Tell a client the vendor cancelled their booking"""
    mjml_content = booking_cancelled_template(
        first_name=client.user.first_name,
        service_name=booking.service.name,
        event_date=booking.event_date,
        cancellation_reason=cancellation_reason or DEFAULT_CANCELLATION_REASON,
    )
    return await send_email(
        to=client.user.email,
        subject="Your Booking Has Been Cancelled",
        mjml_content=mjml_content,
    )


async def send_booking_completion_to_client(booking, client) -> dict:
    """Tell a client the vendor marked their booking completed"""
    mjml_content = booking_completed_template(
        first_name=client.user.first_name,
        service_name=booking.service.name,
        event_date=booking.event_date,
    )
    return await send_email(
        to=client.user.email,
        subject="Your Booking Has Been Completed",
        mjml_content=mjml_content,
    )
