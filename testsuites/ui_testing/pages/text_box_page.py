"""
================================================================================
Text Box Page Object
================================================================================

demoqa "Text Box" form: four text fields and an output panel echoing them.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.toolkit import UiToolkit


class TextBoxPage:
    """Text box form page object."""

    URL_PATH = "text-box"

    FULL_NAME = ElementReference.by_id("userName", name="Full name")
    EMAIL = ElementReference.by_id("userEmail", name="Email")
    CURRENT_ADDRESS = ElementReference.by_id("currentAddress", name="Current address")
    PERMANENT_ADDRESS = ElementReference.by_id("permanentAddress", name="Permanent address")
    SUBMIT = ElementReference.by_id("submit", name="Submit")
    OUTPUT = ElementReference.by_id("output", name="Output panel")

    def __init__(self, ui: UiToolkit):
        self.ui = ui

    def open(self) -> "TextBoxPage":
        self.ui.open(self.URL_PATH)
        return self

    @allure.step("Fill text box form")
    def fill_form(
        self,
        full_name: str,
        email: str,
        current_address: str,
        permanent_address: str,
    ) -> None:
        act = self.ui.interactor
        act.type_text(self.FULL_NAME, full_name)
        act.type_text(self.EMAIL, email)
        act.type_text(self.CURRENT_ADDRESS, current_address)
        act.type_text(self.PERMANENT_ADDRESS, permanent_address)

    def submit(self) -> None:
        self.ui.interactor.click(self.SUBMIT)

    def is_output_displayed(self) -> bool:
        return self.ui.interactor.is_displayed(self.OUTPUT, wait=self.ui.policy)

    def output_text(self) -> str:
        return self.ui.interactor.text_of(self.OUTPUT)
