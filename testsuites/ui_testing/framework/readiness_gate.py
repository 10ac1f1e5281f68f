"""
================================================================================
Page Readiness Gate
================================================================================

Checkpoint run after every navigation:

    - waits (best-effort) for document.readyState == "complete"
    - strips known ad/overlay nodes from the DOM in a single script

Overlays are third-party content and re-insert themselves; suppression is
best-effort and is repeated lazily by ResilientInteractor on its recovery
paths.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from .exceptions import WaitTimeoutError
from .session import BrowserSession
from .wait_policy import WaitPolicy


@dataclass(frozen=True)
class OverlayPattern:
    """
    Named group of CSS selectors identifying overlay/ad nodes.

    Attributes:
        name: Pattern name for logging
        selectors: CSS selectors; any node matching one of them is removed
    """
    name: str
    selectors: Tuple[str, ...]

    def css(self) -> str:
        return ", ".join(self.selectors)


DEFAULT_OVERLAY_PATTERNS: Tuple[OverlayPattern, ...] = (
    OverlayPattern(
        name="ad_iframes",
        selectors=(
            "iframe[id^='google_ads_iframe']",
            "iframe[src*='doubleclick']",
            "iframe[title*='Advertisement']",
            "iframe[title*='Ad.Plus']",
            "iframe[aria-label*='Advertisement']",
        ),
    ),
    OverlayPattern(
        name="inserted_ads",
        selectors=(
            "ins.adsbygoogle",
            "[id^='google_ads']",
            "[id*='adplus']",
            "[class*='adsbygoogle']",
            "[id^='Ad.Plus']",
        ),
    ),
    OverlayPattern(
        name="sticky_banners",
        selectors=(
            "#fixedban",
            "#adplus-anchor",
            "footer",
        ),
    ),
)

# Query and removal happen inside one evaluate() call.
_REMOVE_SCRIPT = """
(selector) => {
    const nodes = Array.from(document.querySelectorAll(selector));
    nodes.forEach((node) => node.remove());
    return nodes.length;
}
"""

_READY_STATE_SCRIPT = "() => document.readyState"


class PageReadinessGate:
    """
    Load-wait and overlay scrubbing for one session.

    Usage:
        gate = PageReadinessGate(session, policy)
        session.navigate(url)
        gate.prepare()
    """

    def __init__(
        self,
        session: BrowserSession,
        policy: WaitPolicy,
        patterns: Sequence[OverlayPattern] = DEFAULT_OVERLAY_PATTERNS,
    ):
        """
        Args:
            session: Browser session to gate
            policy: Wait policy for the load wait
            patterns: Overlay patterns removed by suppress_overlays()
        """
        self.session = session
        self.policy = policy
        self.patterns = tuple(patterns)

    @property
    def overlay_selector(self) -> str:
        """Combined CSS selector for every configured pattern."""
        return ", ".join(p.css() for p in self.patterns if p.selectors)

    def await_ready(self) -> bool:
        """
        Block until the document reports readyState 'complete'.

        A slow third-party resource must not fail an otherwise usable page,
        so a timeout is logged and swallowed.

        Returns:
            True if the document became ready, False on timeout
        """
        try:
            self.policy.until(
                lambda: self.session.page.evaluate(_READY_STATE_SCRIPT) == "complete",
                description="document.readyState == 'complete'",
                ignored=(PlaywrightError,),
                sleep=self.session.pause,
            )
            return True
        except WaitTimeoutError as e:
            logger.warning(f"Page load wait timed out, proceeding anyway: {e}")
            return False

    def suppress_overlays(self) -> int:
        """
        Remove every node matching the overlay patterns in one script call.

        Returns:
            Number of nodes removed (0 if the script failed)
        """
        selector = self.overlay_selector
        if not selector:
            return 0
        try:
            removed = self.session.page.evaluate(_REMOVE_SCRIPT, selector)
        except PlaywrightError as e:
            logger.warning(f"Failed to remove overlays: {e}")
            return 0

        removed = int(removed or 0)
        if removed:
            logger.debug(f"Removed {removed} overlay node(s)")
        return removed

    def prepare(self) -> bool:
        """Run the load wait followed by overlay suppression."""
        ready = self.await_ready()
        self.suppress_overlays()
        return ready


__all__ = [
    "OverlayPattern",
    "DEFAULT_OVERLAY_PATTERNS",
    "PageReadinessGate",
]
