"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for browser tests, providing fixtures for
browser management, page objects, and failure capture.

Key Features:
- One browser per xdist worker, one isolated session per test
- Session closed on every exit path
- Page Object fixtures for all pages
- Screenshot capture on failure

================================================================================
"""

import dataclasses
from typing import Generator

import pytest

from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.config_loader import UIConfig, load_ui_config
from testsuites.ui_testing.framework.reporting import attach_locator_health, init_logger
from testsuites.ui_testing.framework.session import BrowserSession
from testsuites.ui_testing.framework.toolkit import UiToolkit
from testsuites.ui_testing.pages import (
    AlertsPage,
    ButtonsPage,
    CheckBoxPage,
    DatePickerPage,
    FramesPage,
    PracticeFormPage,
    ProgressBarPage,
    RadioButtonPage,
    SliderPage,
    TextBoxPage,
)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_config(pytestconfig) -> UIConfig:
    """
    Session-scoped UI configuration with command line overrides applied.
    """
    init_logger()
    config = load_ui_config()

    overrides = {}
    if pytestconfig.getoption("--browser"):
        overrides["browser"] = pytestconfig.getoption("--browser")
    if pytestconfig.getoption("--headed"):
        overrides["headless"] = False
    return dataclasses.replace(config, **overrides) if overrides else config


@pytest.fixture(scope="session")
def browser_manager(ui_config: UIConfig) -> Generator[BrowserManager, None, None]:
    """
    Session-scoped browser manager fixture.

    Provides a single browser per worker, reducing browser launch overhead.
    """
    with BrowserManager.from_config(ui_config) as manager:
        yield manager


@pytest.fixture(scope="function")
def browser_session(
    request,
    browser_manager: BrowserManager,
    ui_config: UIConfig,
) -> Generator[BrowserSession, None, None]:
    """
    Function-scoped browser session, isolated per test.
    """
    session = browser_manager.open_session(ui_config, name=request.node.name)
    try:
        yield session
    finally:
        browser_manager.close_session(session)


@pytest.fixture(scope="function")
def ui(browser_session: BrowserSession, ui_config: UIConfig) -> Generator[UiToolkit, None, None]:
    """
    Framework components wired around the test's session.
    """
    toolkit = UiToolkit.for_session(browser_session, ui_config)
    yield toolkit
    attach_locator_health(toolkit.locator)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def text_box_page(ui: UiToolkit) -> TextBoxPage:
    return TextBoxPage(ui)


@pytest.fixture
def check_box_page(ui: UiToolkit) -> CheckBoxPage:
    return CheckBoxPage(ui)


@pytest.fixture
def radio_button_page(ui: UiToolkit) -> RadioButtonPage:
    return RadioButtonPage(ui)


@pytest.fixture
def buttons_page(ui: UiToolkit) -> ButtonsPage:
    return ButtonsPage(ui)


@pytest.fixture
def practice_form_page(ui: UiToolkit) -> PracticeFormPage:
    return PracticeFormPage(ui)


@pytest.fixture
def alerts_page(ui: UiToolkit) -> AlertsPage:
    return AlertsPage(ui)


@pytest.fixture
def frames_page(ui: UiToolkit) -> FramesPage:
    return FramesPage(ui)


@pytest.fixture
def progress_bar_page(ui: UiToolkit) -> ProgressBarPage:
    return ProgressBarPage(ui)


@pytest.fixture
def slider_page(ui: UiToolkit) -> SliderPage:
    return SliderPage(ui)


@pytest.fixture
def date_picker_page(ui: UiToolkit) -> DatePickerPage:
    return DatePickerPage(ui)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Runs before fixture teardown, so the test's session is still open.
    FailureArtifactCapture never raises, so the original failure is kept.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        toolkit = getattr(item, "funcargs", {}).get("ui")
        if isinstance(toolkit, UiToolkit):
            toolkit.failure_capture.capture(item.nodeid)


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def student_picture(tmp_path) -> str:
    """
    A tiny PNG for the practice form upload field.
    """
    picture = tmp_path / "student.png"
    picture.write_bytes(
        bytes.fromhex(
            "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
            "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
        )
    )
    return str(picture)
