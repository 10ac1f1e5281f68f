"""
================================================================================
Alerts Page Object
================================================================================

demoqa "Alerts": immediate alert, delayed alert (5s), confirm and prompt.

Every trigger goes through DialogSynchronizer so the answer is in place
before the dialog opens.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.dialog_synchronizer import DialogOutcome, DialogResponse
from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.toolkit import UiToolkit


class AlertsPage:
    """Native dialog page object."""

    URL_PATH = "alerts"

    ALERT_BUTTON = ElementReference.by_id("alertButton", name="Alert button")
    TIMER_ALERT_BUTTON = ElementReference.by_id("timerAlertButton", name="Timer alert button")
    CONFIRM_BUTTON = ElementReference.by_id("confirmButton", name="Confirm button")
    PROMPT_BUTTON = ElementReference.by_id("promtButton", name="Prompt button")
    CONFIRM_RESULT = ElementReference.by_id("confirmResult", name="Confirm result")
    PROMPT_RESULT = ElementReference.by_id("promptResult", name="Prompt result")

    def __init__(self, ui: UiToolkit):
        self.ui = ui

    def open(self) -> "AlertsPage":
        self.ui.open(self.URL_PATH)
        return self

    @allure.step("Accept simple alert")
    def accept_alert(self) -> DialogOutcome:
        return self.ui.dialogs.trigger(self.ALERT_BUTTON, DialogResponse.accepting())

    @allure.step("Accept delayed alert")
    def accept_timer_alert(self) -> DialogOutcome:
        return self.ui.dialogs.trigger(self.TIMER_ALERT_BUTTON, DialogResponse.accepting())

    @allure.step("Answer confirm (accept={accept})")
    def answer_confirm(self, accept: bool = True) -> DialogOutcome:
        response = DialogResponse.accepting() if accept else DialogResponse.dismissing()
        return self.ui.dialogs.trigger(self.CONFIRM_BUTTON, response)

    @allure.step("Answer prompt with {text}")
    def answer_prompt(self, text: str) -> DialogOutcome:
        return self.ui.dialogs.trigger(self.PROMPT_BUTTON, DialogResponse.prompt(text))

    def confirm_result(self) -> str:
        return self.ui.interactor.text_of(self.CONFIRM_RESULT)

    def prompt_result(self) -> str:
        return self.ui.interactor.text_of(self.PROMPT_RESULT)
