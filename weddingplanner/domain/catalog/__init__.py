"""Catalog domain - Services vendors offer and the public browse listing"""

from .router import router

__all__ = ["router"]
