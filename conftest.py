"""
Repository-level pytest configuration.

Command line options live here so they are registered no matter which test
directory is passed to pytest:

    --run-e2e   run browser tests against demoqa.com (or set UI_RUN_E2E=1)
    --browser   chromium | firefox | webkit (overrides ui.browser)
    --headed    show the browser window (overrides ui.headless)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    group = parser.getgroup("ui", "UI automation options")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=os.environ.get("UI_RUN_E2E", "").lower() in ("1", "true", "yes"),
        help="Run end-to-end browser tests (default: UI_RUN_E2E env var)",
    )
    group.addoption(
        "--browser",
        action="store",
        default=None,
        choices=("chromium", "firefox", "webkit"),
        help="Browser engine for UI tests",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Run the browser with a visible window",
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
