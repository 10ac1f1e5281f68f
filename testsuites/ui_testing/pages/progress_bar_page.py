"""
================================================================================
Progress Bar Page Object
================================================================================

demoqa "Progress Bar": a start/stop button driving a bar whose
aria-valuenow climbs from 0 to 100 over roughly ten seconds.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.toolkit import UiToolkit
from testsuites.ui_testing.framework.wait_policy import get_wait_policy


class ProgressBarPage:
    """Progress bar page object."""

    URL_PATH = "progress-bar"

    START_STOP = ElementReference.by_id("startStopButton", name="Start/Stop")
    PROGRESS_BAR = ElementReference.by_css(".progress-bar", name="Progress bar")

    def __init__(self, ui: UiToolkit):
        self.ui = ui
        self.completion_policy = get_wait_policy("slow_widget")

    def open(self) -> "ProgressBarPage":
        self.ui.open(self.URL_PATH)
        return self

    @allure.step("Start the progress bar")
    def start(self) -> str:
        """Click Start and wait until the bar has left 0."""
        self.ui.gate.suppress_overlays()
        self.ui.interactor.click(self.START_STOP)
        value = self.ui.interactor.wait_for_attribute_change(
            self.PROGRESS_BAR, "aria-valuenow", away_from="0"
        )
        logger.debug(f"Progress bar started at {value}")
        return value

    @allure.step("Wait for progress bar to reach 100")
    def wait_for_completion(self) -> str:
        return self.ui.interactor.wait_for_attribute(
            self.PROGRESS_BAR, "aria-valuenow", "100", policy=self.completion_policy
        )

    def value(self) -> Optional[str]:
        return self.ui.interactor.attribute_of(self.PROGRESS_BAR, "aria-valuenow")
