"""
================================================================================
Frames Page Object
================================================================================

demoqa "Frames": two iframes loading the same sample page at different sizes.

================================================================================
"""

from __future__ import annotations

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.toolkit import UiToolkit


class FramesPage:
    """Iframe page object."""

    URL_PATH = "frames"

    FRAME_1 = ElementReference.by_id("frame1", name="Large frame")
    FRAME_2 = ElementReference.by_id("frame2", name="Small frame")
    SAMPLE_HEADING = ElementReference.by_id("sampleHeading", name="Sample heading")

    def __init__(self, ui: UiToolkit):
        self.ui = ui

    def open(self) -> "FramesPage":
        self.ui.open(self.URL_PATH)
        return self

    def frame_text(self, frame: ElementReference) -> str:
        """Whole body text of `frame`."""
        return self.ui.frames.frame_text(frame)

    def heading_in(self, frame: ElementReference) -> str:
        """Sample heading read through the interactor while inside `frame`."""
        with self.ui.frames.inside(frame):
            return self.ui.interactor.text_of(self.SAMPLE_HEADING)
