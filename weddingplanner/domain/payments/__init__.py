"""Payment domain - Chapa checkouts, verification and webhooks"""

from .router import router

__all__ = ["router"]
