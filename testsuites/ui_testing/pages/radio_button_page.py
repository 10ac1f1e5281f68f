"""
================================================================================
Radio Button Page Object
================================================================================

demoqa "Radio Button": the inputs are visually hidden behind custom labels,
so selections click the label; "No" is permanently disabled.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.toolkit import UiToolkit


class RadioButtonPage:
    """Radio button page object."""

    URL_PATH = "radio-button"

    LABELS = ElementReference.by_css("label[for$='Radio']", name="Radio labels")
    YES_LABEL = ElementReference.by_css("label[for='yesRadio']", name="Yes")
    IMPRESSIVE_LABEL = ElementReference.by_css("label[for='impressiveRadio']", name="Impressive")
    NO_RADIO = ElementReference.by_id("noRadio", name="No radio")
    RESULT = ElementReference.by_css("p.mt-3", name="Result", fallbacks=(".text-success",))

    def __init__(self, ui: UiToolkit):
        self.ui = ui

    def open(self) -> "RadioButtonPage":
        self.ui.open(self.URL_PATH)
        return self

    @allure.step("Choose radio option {option}")
    def choose(self, option: str) -> None:
        self.ui.interactor.select_where_text_equals(self.LABELS, option)

    def click_yes(self) -> None:
        self.ui.interactor.click(self.YES_LABEL)

    def click_impressive(self) -> None:
        self.ui.interactor.click(self.IMPRESSIVE_LABEL)

    def is_no_enabled(self) -> bool:
        return self.ui.interactor.is_enabled(self.NO_RADIO)

    def result_text(self) -> str:
        return self.ui.interactor.text_of(self.RESULT)
