"""Vendor domain - Vendor profiles and admin approval"""

from .router import router

__all__ = ["router"]
