"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One Playwright browser per manager
    - Isolated context per session (separate cookies, storage, dialogs)
    - Navigation timeout taken from UIConfig
    - Browser configuration presets

A BrowserSession must only be used from the thread that created it; run
sessions in parallel with pytest-xdist workers, not threads.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Playwright,
    sync_playwright,
)

from .config_loader import UIConfig
from .session import BrowserSession


class BrowserManager:
    """
    Manages the browser process and the sessions opened on it.

    Usage:
        with BrowserManager(browser_type="chromium", headless=True) as manager:
            session = manager.open_session(config, name="test_forms")
            session.navigate(config.url_for("text-box"))
            ...
            manager.close_session(session)
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
            "--disable-notifications",
            "--disable-popup-blocking",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: bool = True,
        browser_type: str = "chromium",
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode
            browser_type: Browser to use - 'chromium', 'firefox', 'webkit'
        """
        self.headless = headless
        self.browser_type = browser_type

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: Dict[int, BrowserContext] = {}

    @classmethod
    def from_config(cls, config: UIConfig) -> "BrowserManager":
        return cls(headless=config.headless, browser_type=config.browser)

    def __enter__(self) -> "BrowserManager":
        """Context manager entry - start browser."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close browser."""
        self.close()

    def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = sync_playwright().start()

        # Select browser type
        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }

        self._browser = browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    def open_session(
        self,
        config: UIConfig,
        name: str = "session",
        **context_options: Any,
    ) -> BrowserSession:
        """
        Open an isolated browser session.

        Args:
            config: UI configuration (navigation timeout)
            name: Session name used in logs
            **context_options: Extra Playwright context options

        Returns:
            New BrowserSession bound to the calling thread
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = self._browser.new_context(
            **{**self.DEFAULT_CONTEXT_OPTIONS, **context_options}
        )
        context.set_default_navigation_timeout(config.page_load_timeout_seconds * 1000)
        page = context.new_page()

        session = BrowserSession(page, name=name)
        self._contexts[id(session)] = context
        logger.debug(f"Session opened: {name}")
        return session

    def close_session(self, session: BrowserSession) -> None:
        """Close a session's context. Safe to call more than once."""
        context = self._contexts.pop(id(session), None)
        if context is None:
            return
        try:
            context.close()
        except PlaywrightError as e:
            logger.warning(f"Error closing session {session.name}: {e}")
        logger.debug(f"Session closed: {session.name}")

    def close(self) -> None:
        """Close all contexts and browser."""
        for context in list(self._contexts.values()):
            try:
                context.close()
            except PlaywrightError as e:
                logger.warning(f"Error closing browser context: {e}")
        self._contexts.clear()

        if self._browser:
            self._browser.close()
            self._browser = None

        if self._playwright:
            self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")


__all__ = [
    "BrowserManager",
]
