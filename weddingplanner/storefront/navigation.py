"""In-app routing and full-page redirects"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class Navigator:
    def __init__(self, location: str = "/"):
        self.location = location
        self.history: list[str] = [location]
        self.redirected_to: Optional[str] = None

    def navigate(self, path: str):
        """Client-side route change"""
        self.location = path
        self.history.append(path)

    def redirect(self, url: str):
        """Full-page location change, leaving the app"""
        logger.info(f"Redirecting to: {url}")
        self.location = url
        self.redirected_to = url
        self.history.append(url)
