"""
================================================================================
Browser Session
================================================================================

One Playwright page driven by exactly one test.

The session is the explicit context every framework component receives:
it knows the page, the browsing context currently targeted (top-level
document or one entered iframe) and the thread that owns it. There is no
module-level driver state anywhere in the framework.

================================================================================
"""

from __future__ import annotations

import threading
from typing import Optional, Union

from loguru import logger
from playwright.sync_api import Frame, Page

from .exceptions import FrameContextError, SessionOwnershipError


class BrowserSession:
    """
    Exclusive handle on a single browser page.

    Playwright's sync API is bound to the thread that started it; the owner
    check turns accidental cross-thread use into an immediate error instead
    of undefined driver behavior.
    """

    def __init__(self, page: Page, name: str = "session"):
        """
        Args:
            page: Playwright Page owned by this session
            name: Label used in log lines (usually the test name)
        """
        self.page = page
        self.name = name
        self._frame: Optional[Frame] = None
        self._owner = threading.get_ident()

    def _check_owner(self) -> None:
        if threading.get_ident() != self._owner:
            raise SessionOwnershipError(
                f"Session '{self.name}' is owned by thread {self._owner}; "
                f"concurrent commands against one session are not allowed"
            )

    @property
    def context(self) -> Union[Page, Frame]:
        """Browsing context that element queries currently run against."""
        self._check_owner()
        return self._frame if self._frame is not None else self.page

    @property
    def in_frame(self) -> bool:
        return self._frame is not None

    @property
    def is_active(self) -> bool:
        """True while the underlying page is open."""
        try:
            return not self.page.is_closed()
        except Exception:
            return False

    def enter_frame(self, frame: Frame) -> None:
        """Switch element queries into `frame` (one level only)."""
        self._check_owner()
        if self._frame is not None:
            raise FrameContextError(
                "Already inside a frame; nested frame switching is not supported"
            )
        self._frame = frame
        logger.debug(f"[{self.name}] Entered frame: {frame.name or frame.url}")

    def leave_frame(self) -> None:
        """Return element queries to the top-level document."""
        self._check_owner()
        if self._frame is None:
            raise FrameContextError("leave() called while not inside a frame")
        self._frame = None
        logger.debug(f"[{self.name}] Returned to top-level document")

    def navigate(self, url: str, timeout_seconds: float = 30.0) -> None:
        """
        Navigate the page to `url`.

        Args:
            url: Absolute URL
            timeout_seconds: Page load timeout for the navigation itself
        """
        self._check_owner()
        if self._frame is not None:
            raise FrameContextError("Cannot navigate while inside a frame; call leave() first")
        self.page.goto(url, wait_until="domcontentloaded", timeout=timeout_seconds * 1000)
        logger.debug(f"[{self.name}] Navigated to: {url}")

    def pause(self, seconds: float) -> None:
        """
        Sleep while letting Playwright dispatch events (dialogs, responses).

        Used as the WaitPolicy sleep function for waits against this session.
        """
        self.page.wait_for_timeout(seconds * 1000)

    def evaluate(self, script: str, arg=None):
        """Run a script in the current browsing context."""
        return self.context.evaluate(script, arg)


__all__ = [
    "BrowserSession",
]
