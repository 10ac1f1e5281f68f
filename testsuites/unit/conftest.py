"""
Fixtures for framework unit tests.

Every test runs on virtual time: wait_policy's `time` module is replaced by
a FakeClock, and FakePage.wait_for_timeout advances the same clock.
"""

import pytest

from testsuites.ui_testing.framework import wait_policy as wait_policy_module
from testsuites.ui_testing.framework.dialog_synchronizer import DialogSynchronizer
from testsuites.ui_testing.framework.element_locator import ElementLocator
from testsuites.ui_testing.framework.frame_navigator import FrameNavigator
from testsuites.ui_testing.framework.readiness_gate import PageReadinessGate
from testsuites.ui_testing.framework.resilient_interactor import ResilientInteractor
from testsuites.ui_testing.framework.session import BrowserSession
from testsuites.ui_testing.framework.wait_policy import WaitPolicy
from testsuites.unit.fakes import FakeClock, FakePage


@pytest.fixture(autouse=True)
def clock(monkeypatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(wait_policy_module, "time", fake)
    return fake


@pytest.fixture
def page(clock) -> FakePage:
    return FakePage(clock)


@pytest.fixture
def session(page) -> BrowserSession:
    return BrowserSession(page, name="unit")


@pytest.fixture
def policy() -> WaitPolicy:
    return WaitPolicy(timeout=2.0, poll_interval=0.5)


@pytest.fixture
def locator(session) -> ElementLocator:
    return ElementLocator(session)


@pytest.fixture
def gate(session, policy) -> PageReadinessGate:
    return PageReadinessGate(session, policy)


@pytest.fixture
def interactor(session, policy, locator, gate) -> ResilientInteractor:
    return ResilientInteractor(session, policy, locator=locator, gate=gate, native_timeout=1.0)


@pytest.fixture
def frames(session, policy) -> FrameNavigator:
    return FrameNavigator(session, policy)


@pytest.fixture
def dialogs(session, interactor, gate, frames) -> DialogSynchronizer:
    return DialogSynchronizer(
        session,
        interactor,
        gate,
        frames,
        WaitPolicy(timeout=10.0, poll_interval=0.5),
        overlay_close_policy=WaitPolicy(timeout=1.0, poll_interval=0.25),
    )
