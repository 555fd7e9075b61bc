"""Storefront - client-side cart and checkout flow against the marketplace API"""

from .api_client import ApiError, MarketplaceClient
from .cart import Cart, CartItem
from .checkout import CheckoutOrchestrator, CheckoutResult
from .navigation import Navigator
from .notifications import Notifier
from .storage import BrowserStorage

__all__ = [
    "ApiError",
    "BrowserStorage",
    "Cart",
    "CartItem",
    "CheckoutOrchestrator",
    "CheckoutResult",
    "MarketplaceClient",
    "Navigator",
    "Notifier",
]
