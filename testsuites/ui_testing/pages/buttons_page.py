"""
================================================================================
Buttons Page Object
================================================================================

demoqa "Buttons": double click, right click and a dynamically-id'd click.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.toolkit import UiToolkit


class ButtonsPage:
    """Buttons page object."""

    URL_PATH = "buttons"

    DOUBLE_CLICK = ElementReference.by_id("doubleClickBtn", name="Double Click Me")
    RIGHT_CLICK = ElementReference.by_id("rightClickBtn", name="Right Click Me")
    # The third button gets a generated id on every render
    CLICK_ME = ElementReference.by_xpath("//button[text()='Click Me']", name="Click Me")
    DOUBLE_CLICK_MESSAGE = ElementReference.by_id("doubleClickMessage")
    RIGHT_CLICK_MESSAGE = ElementReference.by_id("rightClickMessage")
    DYNAMIC_CLICK_MESSAGE = ElementReference.by_id("dynamicClickMessage")

    def __init__(self, ui: UiToolkit):
        self.ui = ui

    def open(self) -> "ButtonsPage":
        self.ui.open(self.URL_PATH)
        return self

    @allure.step("Double click the button")
    def double_click_me(self) -> None:
        self.ui.interactor.double_click(self.DOUBLE_CLICK)

    @allure.step("Right click the button")
    def right_click_me(self) -> None:
        self.ui.interactor.context_click(self.RIGHT_CLICK)

    @allure.step("Click the dynamic button")
    def click_me(self) -> None:
        self.ui.interactor.click(self.CLICK_ME)

    def double_click_message(self) -> str:
        return self.ui.interactor.text_of(self.DOUBLE_CLICK_MESSAGE)

    def right_click_message(self) -> str:
        return self.ui.interactor.text_of(self.RIGHT_CLICK_MESSAGE)

    def dynamic_click_message(self) -> str:
        return self.ui.interactor.text_of(self.DYNAMIC_CLICK_MESSAGE)
