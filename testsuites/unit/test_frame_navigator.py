import threading

import pytest

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.exceptions import (
    FrameContextError,
    FrameNotFoundError,
    SessionOwnershipError,
)
from testsuites.unit.fakes import FakeElement, FakeFrame


FRAME_1 = ElementReference.by_id("frame1", name="Large frame")
FRAME_2 = ElementReference.by_id("frame2", name="Small frame")
HEADING = ElementReference.by_id("sampleHeading")


@pytest.fixture
def frame1(page) -> FakeFrame:
    frame = FakeFrame(name="frame1", body_text="This is a sample page")
    frame.add(HEADING, FakeElement(text="This is a sample page"))
    page.add(FRAME_1, FakeElement(frame=frame))
    return frame


def test_enter_switches_context_once(session, frames, frame1):
    assert frames.enter(FRAME_1) is frame1
    assert session.in_frame
    assert session.context is frame1

    frames.leave()
    assert not session.in_frame


def test_enter_waits_for_late_frame(page, frames, clock):
    frame = FakeFrame(name="frame2")
    clock.after(1.0, lambda: page.add(FRAME_2, FakeElement(frame=frame)))

    assert frames.enter(FRAME_2) is frame


def test_missing_frame_raises_not_found(session, frames):
    with pytest.raises(FrameNotFoundError):
        frames.enter(FRAME_2)
    assert not session.in_frame


def test_nested_enter_is_rejected(page, frames, frame1):
    page.add(FRAME_2, FakeElement(frame=FakeFrame(name="frame2")))
    frames.enter(FRAME_1)

    with pytest.raises(FrameContextError):
        frames.enter(FRAME_2)


def test_leave_at_top_level_is_rejected(frames):
    with pytest.raises(FrameContextError):
        frames.leave()


def test_inside_always_leaves(session, frames, frame1):
    with pytest.raises(RuntimeError):
        with frames.inside(FRAME_1):
            raise RuntimeError("step failed")

    assert not session.in_frame


def test_interactor_reads_inside_frame(session, frames, interactor, frame1):
    with frames.inside(FRAME_1):
        assert interactor.text_of(HEADING) == "This is a sample page"

    assert not session.in_frame


def test_frame_text(session, frames, frame1):
    assert frames.frame_text(FRAME_1) == "This is a sample page"
    assert not session.in_frame


def test_navigate_inside_frame_is_rejected(session, frames, frame1):
    frames.enter(FRAME_1)

    with pytest.raises(FrameContextError):
        session.navigate("https://demoqa.com/frames")


def test_session_rejects_foreign_thread(session):
    errors = []

    def use_session():
        try:
            session.context
        except SessionOwnershipError as e:
            errors.append(e)

    worker = threading.Thread(target=use_session)
    worker.start()
    worker.join()

    assert len(errors) == 1
