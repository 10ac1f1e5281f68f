"""
================================================================================
Dialog Synchronizer
================================================================================

Native alert / confirm / prompt handling for one browser session.

    NoDialog -> (arm response + trigger) -> DialogPresent
             -> (accept | dismiss | prompt text + accept) -> NoDialog

Playwright delivers dialogs as page events and the page stays blocked until
the listener answers, so the answer is armed *before* the triggering click
and applied inside the listener the moment the dialog opens. The Playwright
Dialog object never leaves the listener; callers receive an immutable
DialogOutcome describing what was shown and how it was answered.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import allure
from loguru import logger
from playwright.sync_api import Dialog
from playwright.sync_api import Error as PlaywrightError

from .element_locator import ElementReference
from .exceptions import (
    DialogNotPresentError,
    ElementNotFoundError,
    StaleReferenceError,
    WaitTimeoutError,
)
from .frame_navigator import FrameNavigator
from .readiness_gate import PageReadinessGate
from .resilient_interactor import ResilientInteractor
from .session import BrowserSession
from .wait_policy import WaitPolicy, get_wait_policy


# Third-party ad frames known to cover dialog trigger buttons
AD_FRAME = ElementReference.by_css(
    "iframe[title*='ad']",
    name="ad iframe",
    fallbacks=("iframe[aria-label*='ad']", "iframe[title*='Ad.Plus']"),
)
AD_CLOSE_BUTTON = "[aria-label*='Close'], [title*='Close'], .close-button, .ads-close-button"


@dataclass(frozen=True)
class DialogResponse:
    """
    How to answer the next native dialog.

    Attributes:
        accept: Accept (OK) when True, dismiss (Cancel) when False
        prompt_text: Text typed into a prompt before accepting
    """
    accept: bool = True
    prompt_text: Optional[str] = None

    @classmethod
    def accepting(cls) -> "DialogResponse":
        return cls(accept=True)

    @classmethod
    def dismissing(cls) -> "DialogResponse":
        return cls(accept=False)

    @classmethod
    def prompt(cls, text: str) -> "DialogResponse":
        return cls(accept=True, prompt_text=text)


@dataclass(frozen=True)
class DialogOutcome:
    """
    Record of a handled dialog.

    Attributes:
        kind: 'alert', 'confirm', 'prompt' or 'beforeunload'
        message: Text shown by the dialog
        default_value: Prompt default value ('' for other kinds)
        accepted: Whether the dialog was accepted
        prompt_text: Text sent to a prompt (None if not a prompt answer)
    """
    kind: str
    message: str
    default_value: str
    accepted: bool
    prompt_text: Optional[str] = None


class DialogSynchronizer:
    """
    Waits for and answers native browser dialogs.

    One instance per session: its listener answers every dialog the page
    raises. Dialogs that arrive while nothing is armed are dismissed with a
    warning (Playwright's own default).

    Usage:
        dialogs = DialogSynchronizer(session, interactor, gate, frames, policy)
        outcome = dialogs.trigger(prompt_button, DialogResponse.prompt("Hello World"))
        assert outcome.kind == "prompt"
    """

    def __init__(
        self,
        session: BrowserSession,
        interactor: ResilientInteractor,
        gate: PageReadinessGate,
        frames: FrameNavigator,
        policy: WaitPolicy,
        overlay_close_policy: Optional[WaitPolicy] = None,
    ):
        """
        Args:
            session: Browser session whose page raises the dialogs
            interactor: Interactor used for the triggering click
            gate: Readiness gate used to strip overlays before triggering
            frames: Frame navigator used to reach ad close buttons
            policy: Wait policy for await_dialog()
            overlay_close_policy: Short policy bounding the ad-close attempt
        """
        self.session = session
        self.interactor = interactor
        self.gate = gate
        self.frames = frames
        self.policy = policy
        self.overlay_close_policy = overlay_close_policy or get_wait_policy("short")

        self._armed: Optional[DialogResponse] = None
        self._outcome: Optional[DialogOutcome] = None
        self.history: list[DialogOutcome] = []

        session.page.on("dialog", self._on_dialog)

    # =========================================================================
    # Public API
    # =========================================================================

    def respond_with(self, response: DialogResponse) -> None:
        """Arm the answer for the next dialog and forget any earlier outcome."""
        self._armed = response
        self._outcome = None

    def await_dialog(self) -> DialogOutcome:
        """
        Block until the armed dialog has appeared and been answered.

        Returns:
            Outcome of the handled dialog

        Raises:
            DialogNotPresentError: If no dialog appeared within the policy timeout
        """
        try:
            outcome = self.policy.until(
                lambda: self._outcome,
                description="native dialog to appear",
                sleep=self.session.pause,
            )
        except WaitTimeoutError as e:
            self._armed = None
            raise DialogNotPresentError(
                f"No native dialog appeared within {self.policy.timeout}s"
            ) from e

        self._outcome = None
        return outcome

    def trigger(
        self,
        trigger_ref: ElementReference,
        response: Optional[DialogResponse] = None,
    ) -> DialogOutcome:
        """
        Click a dialog-raising element and answer the resulting dialog.

        Overlays are stripped and an ad close button is tried first because
        some trigger buttons sit behind third-party content.

        Args:
            trigger_ref: Element whose click raises the dialog
            response: Answer for the dialog (accept by default)

        Returns:
            Outcome of the handled dialog
        """
        response = response or DialogResponse.accepting()
        with allure.step(f"Trigger dialog via {trigger_ref.label}"):
            self.gate.suppress_overlays()
            self.close_ad_if_present()
            self.respond_with(response)
            try:
                self.interactor.click(trigger_ref)
            except BaseException:
                # the dialog never opened; its answer must not reach a later one
                self._armed = None
                raise
            return self.await_dialog()

    def close_ad_if_present(self) -> bool:
        """
        Best-effort close of an ad iframe covering the page.

        Bounded by the short overlay-close policy. Not finding an ad, or
        failing to close it, is not an error.

        Returns:
            True if a close button was clicked
        """
        try:
            with self.frames.inside(AD_FRAME, wait=self.overlay_close_policy) as frame:
                close_buttons = frame.query_selector_all(AD_CLOSE_BUTTON)
                if not close_buttons:
                    return False
                close_buttons[0].click(timeout=self.overlay_close_policy.timeout * 1000)
                logger.info("Ad closed successfully.")
                return True
        except (ElementNotFoundError, StaleReferenceError, PlaywrightError) as e:
            logger.debug(f"No ad found or could not close ad: {e}")
            return False

    # =========================================================================
    # Listener
    # =========================================================================

    def _on_dialog(self, dialog: Dialog) -> None:
        kind = dialog.type
        message = dialog.message
        default_value = dialog.default_value
        response = self._armed

        if response is None:
            logger.warning(f"Unexpected {kind} dialog dismissed: {message!r}")
            dialog.dismiss()
            return

        self._armed = None
        if response.accept:
            if response.prompt_text is not None and kind == "prompt":
                dialog.accept(response.prompt_text)
            else:
                dialog.accept()
        else:
            dialog.dismiss()

        outcome = DialogOutcome(
            kind=kind,
            message=message,
            default_value=default_value,
            accepted=response.accept,
            prompt_text=response.prompt_text if kind == "prompt" else None,
        )
        self.history.append(outcome)
        self._outcome = outcome
        logger.debug(
            f"{kind} dialog {'accepted' if response.accept else 'dismissed'}: {message!r}"
        )


__all__ = [
    "DialogResponse",
    "DialogOutcome",
    "DialogSynchronizer",
]
