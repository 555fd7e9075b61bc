"""
MJML Email Templates
Transactional emails for vendor approval, bookings and payments
"""

from datetime import datetime
from html import escape
from typing import Optional, Union

from .config import FRONTEND_URL

# Wedding Planner theme colors
THEME = {
    "primary": "#9b59b6",
    "primary_dark": "#7d3c98",
    "background": "#faf7fb",
    "card_bg": "#ffffff",
    "text_primary": "#2d2436",
    "text_secondary": "#4a4156",
    "text_muted": "#7a7086",
    "border": "#e0e0e0",
    "panel": "#f9f9f9",
    "success": "#4CAF50",
    "danger": "#F44336",
}

SIGN_OFF = "Best regards,<br/>The Wedding Planner Team"


def format_event_date(value: Union[datetime, str, None]) -> str:
    """Human readable event date, e.g. 'June 14, 2027'"""
    if value is None:
        return "To be confirmed"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return escape(value)
    return f"{value:%B} {value.day}, {value.year}"


def format_amount(amount: float, currency: str = "ETB") -> str:
    # Up to two decimals, no forced trailing zeros: 2,500 or 1,234.5
    return f"{currency} " + f"{amount:,.2f}".rstrip("0").rstrip(".")


def _detail_panel(rows: list[tuple[str, str]]) -> str:
    lines = "<br/>".join(f"<strong>{label}:</strong> {value}" for label, value in rows)
    return f"""
    <mj-text container-background-color="{THEME['panel']}" padding="15px">
      {lines}
    </mj-text>
    """


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    heading_color: str = THEME["success"],
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
    cta_color: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section background-color="#ffffff" padding="10px 0 30px 0">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{cta_color or heading_color}"
              color="#ffffff"
              font-weight="bold"
              border-radius="4px"
              padding="12px 20px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="Arial, sans-serif" />
          <mj-text font-size="15px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}" width="600px">
        <mj-section background-color="#ffffff" padding="20px" border="1px solid {THEME['border']}">
          <mj-column>
            <mj-text align="center" font-size="22px" font-weight="bold" color="{heading_color}">
              {title}
            </mj-text>

            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section padding="20px">
          <mj-column>
            <mj-text align="center" font-size="12px" color="{THEME['text_muted']}">
              You're receiving this because you have an account with Wedding Planner.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def vendor_approval_template(first_name: str, business_name: str) -> str:
    """Vendor account approved"""
    content = f"""
    <mj-text>Hello {escape(first_name)},</mj-text>
    <mj-text>
      We're pleased to inform you that your vendor account <strong>{escape(business_name)}</strong> has been approved!
    </mj-text>
    <mj-text>
      You can now log in to your vendor dashboard and start managing your services, bookings, and payments.
    </mj-text>
    <mj-text>
      Thank you for joining our wedding planning platform. We look forward to a successful partnership!
    </mj-text>
    <mj-text>{SIGN_OFF}</mj-text>
    """

    return get_base_template(
        title="Congratulations!",
        preview_text=f"{escape(business_name)} is now live on Wedding Planner",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/login",
        cta_label="Go to Vendor Dashboard",
    )


def payment_received_template(
    first_name: str,
    service_name: str,
    client_name: str,
    amount: float,
    event_date: Union[datetime, str, None],
    payment_id: Union[int, str],
    booking_id: Union[int, str],
    currency: str = "ETB",
) -> str:
    """Payment completed for one of the vendor's bookings"""
    details = _detail_panel(
        [
            ("Service", escape(service_name)),
            ("Client", escape(client_name)),
            ("Amount", format_amount(amount, currency)),
            ("Event Date", format_event_date(event_date)),
            ("Payment ID", escape(str(payment_id))),
        ]
    )
    content = f"""
    <mj-text>Hello {escape(first_name)},</mj-text>
    <mj-text>We're pleased to inform you that a payment has been completed for a booking:</mj-text>
    {details}
    <mj-text>Please review the booking details and confirm it at your earliest convenience.</mj-text>
    <mj-text>{SIGN_OFF}</mj-text>
    """

    return get_base_template(
        title="Payment Received",
        preview_text=f"{format_amount(amount, currency)} received for {escape(service_name)}",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/dashboard/bookings/{booking_id}/show",
        cta_label="View Booking Details",
    )


def new_booking_template(
    first_name: str,
    service_name: str,
    client_name: str,
    event_date: Union[datetime, str, None],
    location: str,
    status: str,
    booking_id: Union[int, str],
) -> str:
    """New booking request for a vendor"""
    details = _detail_panel(
        [
            ("Service", escape(service_name)),
            ("Client", escape(client_name)),
            ("Event Date", format_event_date(event_date)),
            ("Location", escape(location or "")),
            ("Status", escape(status or "")),
        ]
    )
    content = f"""
    <mj-text>Hello {escape(first_name)},</mj-text>
    <mj-text>You have received a new booking for your service:</mj-text>
    {details}
    <mj-text>Please review the booking details and confirm it at your earliest convenience.</mj-text>
    <mj-text>{SIGN_OFF}</mj-text>
    """

    return get_base_template(
        title="New Booking Received",
        preview_text=f"New booking for {escape(service_name)}",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/dashboard/bookings/{booking_id}/show",
        cta_label="View Booking Details",
    )


def booking_confirmed_template(
    first_name: str,
    service_name: str,
    event_date: Union[datetime, str, None],
    location: str,
) -> str:
    """Client's booking confirmed by the vendor"""
    details = _detail_panel(
        [
            ("Service", escape(service_name)),
            ("Event Date", format_event_date(event_date)),
            ("Location", escape(location or "")),
        ]
    )
    content = f"""
    <mj-text>Hello {escape(first_name)},</mj-text>
    <mj-text>We're pleased to inform you that your booking has been confirmed by the vendor:</mj-text>
    {details}
    <mj-text>If you have any questions, please contact the vendor directly.</mj-text>
    <mj-text>{SIGN_OFF}</mj-text>
    """

    return get_base_template(
        title="Booking Confirmed",
        preview_text=f"{escape(service_name)} is confirmed",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/dashboard/my-bookings",
        cta_label="View Booking Details",
    )


def booking_cancelled_template(
    first_name: str,
    service_name: str,
    event_date: Union[datetime, str, None],
    cancellation_reason: str,
) -> str:
    """Client's booking cancelled by the vendor"""
    details = _detail_panel(
        [
            ("Service", escape(service_name)),
            ("Event Date", format_event_date(event_date)),
            ("Cancellation Reason", escape(cancellation_reason or "")),
        ]
    )
    content = f"""
    <mj-text>Hello {escape(first_name)},</mj-text>
    <mj-text>We regret to inform you that your booking has been cancelled by the vendor:</mj-text>
    {details}
    <mj-text>If you have any questions, please contact our support team.</mj-text>
    <mj-text>{SIGN_OFF}</mj-text>
    """

    return get_base_template(
        title="Booking Cancelled",
        preview_text=f"{escape(service_name)} has been cancelled",
        content_sections=content,
        heading_color=THEME["danger"],
        cta_url=f"{FRONTEND_URL}/dashboard/my-bookings",
        cta_label="View Booking Details",
    )


def booking_completed_template(
    first_name: str,
    service_name: str,
    event_date: Union[datetime, str, None],
) -> str:
    """Client's booking marked completed by the vendor"""
    details = _detail_panel(
        [
            ("Service", escape(service_name)),
            ("Event Date", format_event_date(event_date)),
        ]
    )
    content = f"""
    <mj-text>Hello {escape(first_name)},</mj-text>
    <mj-text>We're pleased to inform you that your booking has been marked as completed by the vendor:</mj-text>
    {details}
    <mj-text>Thank you for using our platform. We hope you had a great experience!</mj-text>
    <mj-text>{SIGN_OFF}</mj-text>
    """

    return get_base_template(
        title="Booking Completed",
        preview_text=f"{escape(service_name)} is complete",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/dashboard/my-bookings",
        cta_label="View Booking Details",
    )


__all__ = [
    "THEME",
    "get_base_template",
    "format_event_date",
    "format_amount",
    "vendor_approval_template",
    "payment_received_template",
    "new_booking_template",
    "booking_confirmed_template",
    "booking_cancelled_template",
    "booking_completed_template",
]
