from playwright.sync_api import Error as PlaywrightError

from testsuites.ui_testing.framework.readiness_gate import OverlayPattern, PageReadinessGate


def test_await_ready_polls_until_complete(page, gate, clock):
    page.ready_states = ["loading", "interactive", "complete"]

    assert gate.await_ready() is True
    assert clock.sleeps == [0.5, 0.5]


def test_await_ready_timeout_is_not_fatal(page, gate):
    page.ready_states = ["loading"]

    assert gate.await_ready() is False


def test_suppress_overlays_removes_in_one_call(page, gate):
    page.overlays = 3

    assert gate.suppress_overlays() == 3
    assert len(page.removal_selectors) == 1
    selector = page.removal_selectors[0]
    assert "iframe[id^='google_ads_iframe']" in selector
    assert "#fixedban" in selector
    assert "ins.adsbygoogle" in selector


def test_suppress_overlays_is_idempotent(page, gate):
    page.overlays = 2

    assert gate.suppress_overlays() == 2
    assert gate.suppress_overlays() == 0


def test_suppress_overlays_script_error_yields_zero(page, gate):
    page.overlay_error = PlaywrightError("Execution context was destroyed")

    assert gate.suppress_overlays() == 0


def test_custom_patterns(page, session, policy):
    gate = PageReadinessGate(session, policy, patterns=(OverlayPattern("cookie", ("#cookie-banner",)),))
    page.overlays = 1

    assert gate.overlay_selector == "#cookie-banner"
    assert gate.suppress_overlays() == 1


def test_no_patterns_skips_script(page, session, policy):
    gate = PageReadinessGate(session, policy, patterns=())

    assert gate.suppress_overlays() == 0
    assert page.removal_selectors == []


def test_prepare_runs_wait_then_removal(page, gate):
    page.ready_states = ["interactive", "complete"]
    page.overlays = 1

    assert gate.prepare() is True
    assert page.overlays == 0
