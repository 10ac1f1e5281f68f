from datetime import datetime

import pytest
from playwright.sync_api import Error as PlaywrightError

from testsuites.ui_testing.framework import failure_capture as failure_capture_module
from testsuites.ui_testing.framework.failure_capture import FailureArtifactCapture, safe_file_stem
from testsuites.unit.fakes import PNG_BYTES


class FixedDatetime:
    @classmethod
    def now(cls):
        return datetime(2026, 3, 14, 9, 26, 53)


@pytest.fixture
def fixed_now(monkeypatch):
    monkeypatch.setattr(failure_capture_module, "datetime", FixedDatetime)


def test_safe_file_stem():
    assert safe_file_stem("tests/test_forms.py::TestForm::test_submit[chromium]") == (
        "tests_test_forms.py_TestForm_test_submit_chromium"
    )
    assert safe_file_stem("::") == "unnamed_test"


def test_capture_writes_png(session, tmp_path, fixed_now):
    capture = FailureArtifactCapture(session, tmp_path / "screenshots", attach_to_allure=False)

    artifact = capture.capture("test_submit")

    assert artifact is not None
    assert artifact.storage_path == tmp_path / "screenshots" / "test_submit_20260314_092653.png"
    assert artifact.storage_path.read_bytes() == PNG_BYTES
    assert artifact.image == PNG_BYTES
    assert artifact.test_identifier == "test_submit"


def test_capture_attaches_to_allure(session, tmp_path, monkeypatch):
    attached = []
    monkeypatch.setattr(failure_capture_module, "attach_png", lambda image, name: attached.append(name))
    monkeypatch.setattr(failure_capture_module, "attach_text", lambda text, name: attached.append(name))

    FailureArtifactCapture(session, tmp_path).capture("test_submit")

    assert attached == ["Failure Screenshot", "Current URL"]


def test_capture_without_session_returns_none(tmp_path):
    assert FailureArtifactCapture(None, tmp_path).capture("test_x") is None
    assert list(tmp_path.iterdir()) == []


def test_capture_with_closed_page_returns_none(page, session, tmp_path):
    page.close()

    assert FailureArtifactCapture(session, tmp_path).capture("test_x") is None


def test_screenshot_error_returns_none(page, session, tmp_path):
    page.screenshot_error = PlaywrightError("Target page, context or browser has been closed")

    assert FailureArtifactCapture(session, tmp_path).capture("test_x") is None


def test_filesystem_error_returns_none(session, tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file")

    assert FailureArtifactCapture(session, blocker / "screenshots").capture("test_x") is None


def test_existing_artifact_is_never_overwritten(session, tmp_path, fixed_now):
    existing = tmp_path / "test_x_20260314_092653.png"
    existing.write_bytes(b"original")

    artifact = FailureArtifactCapture(session, tmp_path, attach_to_allure=False).capture("test_x")

    assert existing.read_bytes() == b"original"
    assert artifact.storage_path == tmp_path / "test_x_20260314_092653_1.png"
    assert artifact.storage_path.read_bytes() == PNG_BYTES


def test_colliding_test_ids_each_get_an_artifact(session, tmp_path, fixed_now):
    capture = FailureArtifactCapture(session, tmp_path, attach_to_allure=False)

    first = capture.capture("test_login[user a]")
    second = capture.capture("test_login[user_a]")

    assert first.storage_path.name == "test_login_user_a_20260314_092653.png"
    assert second.storage_path.name == "test_login_user_a_20260314_092653_1.png"
    assert sorted(p.name for p in tmp_path.iterdir()) == [first.storage_path.name, second.storage_path.name]


def test_allure_attach_failure_keeps_written_artifact(session, tmp_path, monkeypatch):
    def broken_attach(image, name):
        raise RuntimeError("allure lifecycle not started")

    monkeypatch.setattr(failure_capture_module, "attach_png", broken_attach)

    artifact = FailureArtifactCapture(session, tmp_path).capture("test_x")

    assert artifact is not None
    assert artifact.storage_path.read_bytes() == PNG_BYTES
