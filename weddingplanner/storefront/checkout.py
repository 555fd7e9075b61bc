"""
Checkout flow for the cart modal.

Turns every cart item into a booking on the server, opens a Chapa checkout
for the first booking and sends the browser to it.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .api_client import ApiError, MarketplaceClient
from .cart import Cart, CartItem
from .navigation import Navigator
from .notifications import Notifier
from .storage import (
    PAYMENT_ID_KEY,
    PAYMENT_TX_REF_KEY,
    TOKEN_KEY,
    USER_ROLE_KEY,
    BrowserStorage,
)

logger = logging.getLogger(__name__)

# Placeholders until the client fills in event details on the booking page
DEFAULT_EVENT_OFFSET = timedelta(days=7)
DEFAULT_LOCATION = "To be confirmed"
DEFAULT_ATTENDEES = 50


@dataclass
class CheckoutResult:
    bookings: list[dict]
    payment: dict
    checkout_url: str
    unpaid_bookings: list[dict] = field(default_factory=list)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _isoformat_utc(value: datetime) -> str:
    """ISO-8601 with millisecond precision and a Z suffix"""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _failure_message(error: Exception) -> str:
    if isinstance(error, ApiError):
        return error.message
    return str(error)


class CheckoutOrchestrator:
    def __init__(
        self,
        cart: Cart,
        storage: BrowserStorage,
        client: MarketplaceClient,
        notifier: Notifier,
        navigator: Navigator,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.cart = cart
        self.storage = storage
        self.client = client
        self.notifier = notifier
        self.navigator = navigator
        self.clock = clock
        self.is_open = True
        self.is_processing = False

    def close(self):
        self.is_open = False

    def is_logged_in(self) -> bool:
        token = self.storage.get_any(TOKEN_KEY)
        role = self.storage.get_any(USER_ROLE_KEY)
        logger.debug(f"Auth check - token: {bool(token)}, role: {role}")
        return bool(token)

    def build_booking_request(self, item: CartItem, now: Optional[datetime] = None) -> dict:
        now = now or self.clock()
        return {
            "serviceId": item.id,
            "eventDate": _isoformat_utc(now + DEFAULT_EVENT_OFFSET),
            "location": DEFAULT_LOCATION,
            "attendees": DEFAULT_ATTENDEES,
            "specialRequests": item.description or "",
        }

    async def create_booking(self, item: CartItem) -> dict:
        try:
            response = await self.client.create_booking(self.build_booking_request(item))
        except Exception as e:
            logger.error(f"Error creating booking for service {item.id}: {e}")
            self.notifier.error(f"Failed to create booking: {_failure_message(e)}")
            raise
        return response["booking"]

    async def initiate_payment(self, booking: dict) -> dict:
        payment_data = {
            "amount": booking["service"]["price"],
            "vendorId": booking["service"]["vendor"]["id"],
            "bookingId": booking["id"],
        }
        try:
            return await self.client.initiate_payment(payment_data)
        except Exception as e:
            logger.error(f"Error initiating payment for booking {booking['id']}: {e}")
            self.notifier.error(f"Failed to initiate payment: {_failure_message(e)}")
            raise

    async def checkout(self) -> Optional[CheckoutResult]:
        """
        Book every cart item and redirect to payment for the first booking.

        Returns None when the user is not logged in or the cart is empty.
        Failures are reported through the notifier and leave the cart intact.
        """
        if not self.is_logged_in():
            self.notifier.info("Please log in to complete your purchase")
            self.navigator.navigate("/login")
            self.close()
            return None

        if self.cart.is_empty:
            return None

        self.is_processing = True
        try:
            items = self.cart.items
            logger.info(f"Processing {len(items)} cart item(s)")

            # No rollback: bookings created before a failure stay on the server
            bookings = list(await asyncio.gather(*(self.create_booking(i) for i in items)))
            if not bookings:
                raise ValueError("No bookings were created")

            first, unpaid = bookings[0], bookings[1:]
            if unpaid:
                logger.warning(
                    f"⚠️ Only booking {first['id']} is being paid; "
                    f"{len(unpaid)} other booking(s) remain unpaid"
                )
                self.notifier.warning(
                    f"{len(unpaid)} other booking(s) were created and still need payment"
                )

            payment = await self.initiate_payment(first)
            if not payment or not payment.get("checkoutUrl"):
                raise ValueError("Invalid payment data received")

            self.cart.clear()
            self.close()
            self.notifier.info("Redirecting to payment page...")

            self.storage.session.set_item(PAYMENT_TX_REF_KEY, payment.get("tx_ref"))
            self.storage.session.set_item(PAYMENT_ID_KEY, payment.get("paymentId"))

            self.navigator.redirect(payment["checkoutUrl"])
            return CheckoutResult(
                bookings=bookings,
                payment=payment,
                checkout_url=payment["checkoutUrl"],
                unpaid_bookings=unpaid,
            )
        except Exception as e:
            logger.error(f"❌ Checkout failed: {e}")
            self.notifier.error(f"Checkout failed: {_failure_message(e)}")
            self.is_processing = False
            return None

    def continue_shopping(self):
        self.close()
        self.navigator.navigate("/")

    async def confirm_payment(self) -> Optional[dict]:
        """Verify the payment stored before the redirect, once the client is back"""
        tx_ref = self.storage.session.get_item(PAYMENT_TX_REF_KEY)
        if not tx_ref:
            return None

        try:
            result = await self.client.verify_payment(tx_ref)
        except Exception as e:
            logger.error(f"❌ Payment verification failed for {tx_ref}: {e}")
            self.notifier.error(f"Payment verification failed: {_failure_message(e)}")
            return None
        if result.get("status") == "completed":
            self.storage.session.remove_item(PAYMENT_TX_REF_KEY)
            self.storage.session.remove_item(PAYMENT_ID_KEY)
            self.notifier.success("Payment completed successfully")
        return result
