"""Booking domain - Client bookings and the vendor-driven status lifecycle"""

from .router import router

__all__ = ["router"]
