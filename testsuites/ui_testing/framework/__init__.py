"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for ad-heavy, dynamic web pages.

Components:
    - wait_policy: Bounded polling with a deadline
    - session: One browser page owned by one test
    - element_locator: Fresh-query element resolution with fallback selectors
    - readiness_gate: Load wait and ad/overlay suppression
    - resilient_interactor: Actions with script fallback and stale recovery
    - frame_navigator: Single-level iframe switching
    - dialog_synchronizer: Native alert/confirm/prompt handling
    - failure_capture: Screenshot on test failure
    - toolkit: Per-session wiring used by page objects
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .config_loader import ConfigLoader, UIConfig, load_ui_config
from .dialog_synchronizer import DialogOutcome, DialogResponse, DialogSynchronizer
from .element_locator import ElementLocator, ElementReference
from .exceptions import (
    ConfigurationError,
    DialogNotPresentError,
    ElementNotFoundError,
    FrameContextError,
    FrameNotFoundError,
    InteractionError,
    OptionNotFoundError,
    SessionOwnershipError,
    StaleReferenceError,
    UIFrameworkError,
    WaitTimeoutError,
)
from .failure_capture import FailureArtifact, FailureArtifactCapture
from .frame_navigator import FrameNavigator
from .readiness_gate import OverlayPattern, PageReadinessGate
from .resilient_interactor import ActionPath, ResilientInteractor
from .session import BrowserSession
from .toolkit import UiToolkit
from .wait_policy import WaitPolicy, get_wait_policy

__all__ = [
    "ActionPath",
    "BrowserManager",
    "BrowserSession",
    "ConfigLoader",
    "ConfigurationError",
    "DialogNotPresentError",
    "DialogOutcome",
    "DialogResponse",
    "DialogSynchronizer",
    "ElementLocator",
    "ElementNotFoundError",
    "ElementReference",
    "FailureArtifact",
    "FailureArtifactCapture",
    "FrameContextError",
    "FrameNavigator",
    "FrameNotFoundError",
    "InteractionError",
    "OptionNotFoundError",
    "OverlayPattern",
    "PageReadinessGate",
    "ResilientInteractor",
    "SessionOwnershipError",
    "StaleReferenceError",
    "UIConfig",
    "UIFrameworkError",
    "UiToolkit",
    "WaitPolicy",
    "WaitTimeoutError",
    "get_wait_policy",
    "load_ui_config",
]
