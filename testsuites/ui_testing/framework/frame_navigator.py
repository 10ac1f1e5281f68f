"""
================================================================================
Frame Navigator
================================================================================

Switches the session's query context into one iframe and back.

Only one level of nesting is supported. Entering a frame while already
inside one, or leaving while at the top level, raises FrameContextError
immediately instead of silently querying the wrong document.

================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Frame

from .element_locator import ElementReference
from .exceptions import FrameContextError, FrameNotFoundError, WaitTimeoutError
from .session import BrowserSession
from .wait_policy import WaitPolicy


class FrameNavigator:
    """
    Frame switching for a browser session.

    Usage:
        frames = FrameNavigator(session, policy)
        with frames.inside(ElementReference.by_id("frame1")):
            heading = interactor.text_of(ElementReference.by_id("sampleHeading"))
    """

    def __init__(self, session: BrowserSession, policy: WaitPolicy):
        self.session = session
        self.policy = policy

    def enter(self, frame_ref: ElementReference, wait: Optional[WaitPolicy] = None) -> Frame:
        """
        Switch element queries into the iframe matched by `frame_ref`.

        Waits until the iframe element exists in the top-level document and
        has a content frame; the switch itself happens once.

        Args:
            frame_ref: Reference to the <iframe> element
            wait: Policy for the frame wait (defaults to the navigator's)

        Returns:
            The entered Playwright Frame

        Raises:
            FrameContextError: If already inside a frame
            FrameNotFoundError: If the frame never became available
        """
        if self.session.in_frame:
            raise FrameContextError(
                f"Cannot enter '{frame_ref.label}': already inside a frame "
                f"(nested frames are not supported)"
            )

        policy = wait or self.policy
        page = self.session.page

        def content_frame():
            for _, selector in frame_ref.playwright_selectors():
                handle = page.query_selector(selector)
                if handle is not None:
                    return handle.content_frame()
            return None

        try:
            frame = policy.until(
                content_frame,
                description=f"frame '{frame_ref.label}' to be available",
                ignored=(PlaywrightError,),
                sleep=self.session.pause,
            )
        except WaitTimeoutError as e:
            raise FrameNotFoundError(
                f"Frame '{frame_ref.label}' not available after {e.elapsed:.1f}s"
            ) from e

        self.session.enter_frame(frame)
        return frame

    def leave(self) -> None:
        """
        Return element queries to the top-level document.

        Raises:
            FrameContextError: If not inside a frame
        """
        self.session.leave_frame()

    @contextmanager
    def inside(self, frame_ref: ElementReference, wait: Optional[WaitPolicy] = None) -> Iterator[Frame]:
        """Context manager pairing enter() with exactly one leave()."""
        frame = self.enter(frame_ref, wait=wait)
        try:
            yield frame
        finally:
            self.leave()

    def frame_text(self, frame_ref: ElementReference) -> str:
        """Body text of a frame (enters and leaves around the read)."""
        with allure.step(f"Read text of frame {frame_ref.label}"):
            with self.inside(frame_ref) as frame:
                text = frame.inner_text("body")
            logger.debug(f"Frame '{frame_ref.label}' text: {text[:80]!r}")
            return text


__all__ = [
    "FrameNavigator",
]
