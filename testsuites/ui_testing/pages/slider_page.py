"""
================================================================================
Slider Page Object
================================================================================

demoqa "Slider": a range input mirrored into a read-only value box.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.toolkit import UiToolkit


class SliderPage:
    """Range slider page object."""

    URL_PATH = "slider"

    SLIDER = ElementReference.by_css(".range-slider", name="Slider", fallbacks=("input[type='range']",))
    SLIDER_VALUE = ElementReference.by_id("sliderValue", name="Slider value")

    def __init__(self, ui: UiToolkit):
        self.ui = ui

    def open(self) -> "SliderPage":
        self.ui.open(self.URL_PATH)
        return self

    @allure.step("Set slider to {value}")
    def set_value(self, value: int) -> None:
        # Dragging depends on pixel geometry; set both inputs directly
        self.ui.interactor.set_value_by_script(self.SLIDER, value)
        self.ui.interactor.set_value_by_script(self.SLIDER_VALUE, value)

    def value(self) -> str:
        return self.ui.interactor.value_of(self.SLIDER_VALUE)
