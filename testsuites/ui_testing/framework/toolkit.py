"""
================================================================================
UI Toolkit
================================================================================

Wires every framework component around one BrowserSession.

Page objects receive a UiToolkit instead of inheriting from a base page:
they declare ElementReferences and call the interactor, dialog and frame
helpers they need.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

import allure
from loguru import logger

from .config_loader import UIConfig
from .dialog_synchronizer import DialogSynchronizer
from .element_locator import ElementLocator
from .failure_capture import FailureArtifactCapture
from .frame_navigator import FrameNavigator
from .readiness_gate import PageReadinessGate
from .resilient_interactor import ResilientInteractor
from .session import BrowserSession
from .wait_policy import WaitPolicy


@dataclass
class UiToolkit:
    """
    Per-session bundle of framework components.

    Build with for_session(); the fields share one session and one locator
    so locator health is reported per test.
    """
    config: UIConfig
    session: BrowserSession
    policy: WaitPolicy
    locator: ElementLocator
    gate: PageReadinessGate
    interactor: ResilientInteractor
    frames: FrameNavigator
    dialogs: DialogSynchronizer
    failure_capture: FailureArtifactCapture

    @classmethod
    def for_session(cls, session: BrowserSession, config: UIConfig) -> "UiToolkit":
        policy = config.wait_policy()
        locator = ElementLocator(session)
        gate = PageReadinessGate(session, policy)
        interactor = ResilientInteractor(
            session,
            policy,
            locator=locator,
            gate=gate,
            native_timeout=config.native_action_timeout_seconds,
        )
        frames = FrameNavigator(session, policy)
        dialogs = DialogSynchronizer(
            session,
            interactor,
            gate,
            frames,
            policy,
            overlay_close_policy=config.overlay_close_policy(),
        )
        return cls(
            config=config,
            session=session,
            policy=policy,
            locator=locator,
            gate=gate,
            interactor=interactor,
            frames=frames,
            dialogs=dialogs,
            failure_capture=FailureArtifactCapture(session, config.screenshot_dir),
        )

    def open(self, path: str = "") -> None:
        """
        Navigate to `path` under the base URL and prepare the page.

        Args:
            path: Path relative to UIConfig.base_url (e.g. "text-box")
        """
        url = self.config.url_for(path)
        with allure.step(f"Navigate to {url}"):
            logger.info(f"Navigating to: {url}")
            self.session.navigate(url, timeout_seconds=self.config.page_load_timeout_seconds)
            self.gate.prepare()


__all__ = [
    "UiToolkit",
]
