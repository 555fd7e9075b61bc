"""
Notification dispatch for booking and payment lifecycle events.

Email senders raise on failure; the API must not fail a booking or payment
because a notification could not be delivered, so failures are captured here
and reported back to the caller.
"""

import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


async def send_notification(
    notification_type: str,
    recipient_email: Optional[str],
    email_func: Callable[..., Awaitable[dict]],
    *args,
    **kwargs,
) -> dict:
    """
    Send a single lifecycle email and swallow delivery errors.

    Args:
        notification_type: Type of notification (for logging)
        recipient_email: Address the email goes to (for logging / skip check)
        email_func: One of the email_service send_* coroutines
        *args, **kwargs: Passed through to email_func

    Returns:
        Dict with email_sent status and email_error message
    """
    result = {"email_sent": False, "email_error": None}

    if not recipient_email:
        logger.debug(f"⚠️ No email address for {notification_type} notification")
        return result

    try:
        logger.info(f"📧 Sending {notification_type} email to {recipient_email}")
        await email_func(*args, **kwargs)
        result["email_sent"] = True
        logger.info(f"✅ {notification_type} email sent successfully to {recipient_email}")
    except Exception as e:
        result["email_error"] = str(e)
        logger.error(f"❌ Failed to send {notification_type} email to {recipient_email}: {e}")

    return result
