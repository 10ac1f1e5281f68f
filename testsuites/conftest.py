"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers, tags tests by directory and keeps browser tests
out of default runs.

================================================================================
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests against in-memory browser doubles"
    )
    config.addinivalue_line(
        "markers", "e2e: Browser tests against demoqa.com (need --run-e2e)"
    )
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "elements: Text box, check box, radio button and button pages"
    )
    config.addinivalue_line(
        "markers", "forms: Practice form tests"
    )
    config.addinivalue_line(
        "markers", "alerts: Native dialog and iframe tests"
    )
    config.addinivalue_line(
        "markers", "widgets: Progress bar, slider and date picker tests"
    )


def pytest_collection_modifyitems(config, items):
    """
    Tag tests by directory and skip browser tests unless asked for.
    """
    run_e2e = config.getoption("--run-e2e")
    skip_e2e = pytest.mark.skip(reason="browser test: pass --run-e2e or set UI_RUN_E2E=1")

    for item in items:
        parts = Path(str(item.fspath)).parts
        if "ui_testing" in parts:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)
        if "unit" in parts:
            item.add_marker(pytest.mark.unit)

        if "e2e" in item.keywords and not run_e2e:
            item.add_marker(skip_e2e)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "demoqa UI Automation Framework",
        f"e2e browser tests: {'enabled' if config.getoption('--run-e2e') else 'skipped'}",
        "=" * 60,
        "",
    ]
