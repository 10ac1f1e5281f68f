"""
================================================================================
Date Picker Page Object
================================================================================

demoqa "Date Picker": the date-and-time input is set by script because the
calendar popup is driven by pointer geometry.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.toolkit import UiToolkit


class DatePickerPage:
    """Date picker page object."""

    URL_PATH = "date-picker"

    DATE_AND_TIME = ElementReference.by_id("dateAndTimePickerInput", name="Date and time")

    def __init__(self, ui: UiToolkit):
        self.ui = ui

    def open(self) -> "DatePickerPage":
        self.ui.open(self.URL_PATH)
        return self

    @allure.step("Set date and time to {value}")
    def set_date_and_time(self, value: str) -> None:
        self.ui.interactor.set_value_by_script(self.DATE_AND_TIME, value)

    def date_and_time(self) -> str:
        return self.ui.interactor.value_of(self.DATE_AND_TIME)
