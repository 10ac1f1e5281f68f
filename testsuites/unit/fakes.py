"""
In-memory stand-ins for the Playwright sync objects the framework touches.

Only the calls the framework actually makes are modelled. Time is virtual:
FakeClock replaces the `time` module seen by wait_policy, and
FakePage.wait_for_timeout advances it, firing any scheduled DOM changes.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Callable, Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError

from testsuites.ui_testing.framework.resilient_interactor import (
    CLICK_SCRIPT,
    MOUSE_EVENT_SCRIPT,
    OPTIONS_SCRIPT,
    SCROLL_SCRIPT,
    SELECT_VALUE_SCRIPT,
    SET_VALUE_SCRIPT,
    STATE_SCRIPT,
)

DETACHED_MESSAGE = "Element is not attached to the DOM"

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-screenshot"


def stale_error() -> PlaywrightError:
    return PlaywrightError(DETACHED_MESSAGE)


class FakeClock:
    """Virtual monotonic clock with scheduled callbacks."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []
        self._events: list = []
        self._seq = itertools.count()

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.advance(seconds)

    def advance(self, seconds: float) -> None:
        self.now += seconds
        while self._events and self._events[0][0] <= self.now:
            _, _, callback = heapq.heappop(self._events)
            callback()

    def after(self, seconds: float, callback: Callable[[], None]) -> None:
        """Run `callback` once the clock has advanced by `seconds`."""
        heapq.heappush(self._events, (self.now + seconds, next(self._seq), callback))


class FakeDom:
    """
    Selector registry shared by FakePage and FakeFrame.

    Each add() for a selector appends one generation of matches. A query
    returns the oldest generation and moves on to the next one if there is
    one, so `add(sel, old)` + `add(sel, new)` models a node re-rendered
    between two resolutions.
    """

    def __init__(self):
        self._nodes: Dict[str, List[List["FakeElement"]]] = {}
        self.queries: List[str] = []

    @staticmethod
    def _key(selector) -> str:
        if hasattr(selector, "playwright_selectors"):
            return selector.playwright_selectors()[0][1]
        return selector

    def add(self, selector, *elements: "FakeElement") -> None:
        self._nodes.setdefault(self._key(selector), []).append(list(elements))

    def remove(self, selector) -> None:
        self._nodes.pop(self._key(selector), None)

    def query_selector_all(self, selector: str) -> List["FakeElement"]:
        self.queries.append(selector)
        generations = self._nodes.get(selector)
        if not generations:
            return []
        current = generations[0]
        if len(generations) > 1:
            generations.pop(0)
        return list(current)

    def query_selector(self, selector: str) -> Optional["FakeElement"]:
        matches = self.query_selector_all(selector)
        return matches[0] if matches else None


class FakeElement:
    """ElementHandle double recording native and script actions."""

    def __init__(
        self,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        value: str = "",
        visible: bool = True,
        enabled: bool = True,
        editable: bool = True,
        options: Optional[List[Dict[str, str]]] = None,
        frame: Optional["FakeFrame"] = None,
        on_click: Optional[Callable[[], None]] = None,
    ):
        self.text = text
        self.attributes = dict(attributes or {})
        self.value = value
        self.visible = visible
        self.enabled = enabled
        self.editable = editable
        self.options = list(options or [])
        self.frame = frame
        self.on_click = on_click

        self.connected = True
        self.native_actions: List[tuple] = []
        self.script_actions: List[tuple] = []
        self.scrolls = 0
        self._native_errors: List[BaseException] = []
        self._detach_on_failure = False
        self._script_errors: List[BaseException] = []

    # -- test controls ---------------------------------------------------------

    def detach(self) -> "FakeElement":
        self.connected = False
        return self

    def fail_native(self, *errors: BaseException, detach: bool = False) -> "FakeElement":
        """Make the next native actions raise `errors` in order."""
        self._native_errors.extend(errors)
        self._detach_on_failure = detach
        return self

    def fail_script(self, *errors: BaseException) -> "FakeElement":
        self._script_errors.extend(errors)
        return self

    @property
    def clicks(self) -> int:
        native = sum(1 for name, _ in self.native_actions if name == "click")
        script = sum(1 for name, _ in self.script_actions if name == "click")
        return native + script

    # -- native actions --------------------------------------------------------

    def _check(self) -> None:
        if not self.connected:
            raise stale_error()

    def _native(self, name: str, **details: Any) -> None:
        self._check()
        if self._native_errors:
            error = self._native_errors.pop(0)
            if self._detach_on_failure:
                self.connected = False
            raise error
        self.native_actions.append((name, details))

    def click(self, button: str = "left", timeout: float = None) -> None:
        self._native("click", button=button)
        if self.on_click:
            self.on_click()

    def dblclick(self, timeout: float = None) -> None:
        self._native("dblclick")

    def fill(self, value: str, timeout: float = None) -> None:
        self._native("fill", value=value)
        self.value = value

    def press(self, key: str, timeout: float = None) -> None:
        self._native("press", key=key)

    def select_option(self, value: str = None, timeout: float = None) -> None:
        self._native("select_option", value=value)
        self.value = value

    def set_input_files(self, files, timeout: float = None) -> None:
        self._native("set_input_files", files=files)

    # -- reads -----------------------------------------------------------------

    def inner_text(self) -> str:
        self._check()
        return self.text

    def get_attribute(self, name: str) -> Optional[str]:
        self._check()
        return self.attributes.get(name)

    def input_value(self) -> str:
        self._check()
        return self.value

    def content_frame(self) -> Optional["FakeFrame"]:
        self._check()
        return self.frame

    # -- scripts ---------------------------------------------------------------

    def evaluate(self, script: str, arg: Any = None) -> Any:
        if script == SCROLL_SCRIPT:
            self.scrolls += 1
            return None
        if script == STATE_SCRIPT:
            if not self.connected:
                return None
            return {
                "visible": self.visible,
                "enabled": self.enabled,
                "editable": self.enabled and self.editable,
            }
        if script == OPTIONS_SCRIPT:
            self._check()
            return list(self.options)

        if self._script_errors:
            raise self._script_errors.pop(0)
        if not self.connected:
            return False

        if script == CLICK_SCRIPT:
            self.script_actions.append(("click", None))
            if self.on_click:
                self.on_click()
        elif script == MOUSE_EVENT_SCRIPT:
            self.script_actions.append((arg, None))
        elif script == SET_VALUE_SCRIPT:
            self.script_actions.append(("set_value", arg))
            self.value = arg["value"]
        elif script == SELECT_VALUE_SCRIPT:
            self.script_actions.append(("select_value", arg))
            self.value = arg
        else:
            raise NotImplementedError(f"FakeElement cannot evaluate: {script!r}")
        return True


class FakeFrame(FakeDom):
    """Frame double: its own selector registry plus body text."""

    def __init__(self, name: str = "", url: str = "about:blank", body_text: str = ""):
        super().__init__()
        self.name = name
        self.url = url
        self.body_text = body_text

    def inner_text(self, selector: str) -> str:
        return self.body_text

    def evaluate(self, script: str, arg: Any = None) -> Any:
        raise NotImplementedError("FakeFrame.evaluate")


class FakeDialog:
    """Playwright Dialog double."""

    def __init__(self, type: str, message: str, default_value: str = ""):
        self.type = type
        self.message = message
        self.default_value = default_value
        self.handled: Optional[str] = None
        self.prompt_text: Optional[str] = None

    def accept(self, prompt_text: Optional[str] = None) -> None:
        self.handled = "accepted"
        self.prompt_text = prompt_text

    def dismiss(self) -> None:
        self.handled = "dismissed"


class FakePage(FakeDom):
    """Page double driven by a FakeClock."""

    def __init__(self, clock: Optional[FakeClock] = None, url: str = "https://demoqa.com/"):
        super().__init__()
        self.clock = clock or FakeClock()
        self.url = url
        self.closed = False
        self.ready_states: List[str] = ["complete"]
        self.overlays = 0
        self.overlay_error: Optional[BaseException] = None
        self.removal_selectors: List[str] = []
        self.screenshot_error: Optional[BaseException] = None
        self.visited: List[str] = []
        self._handlers: Dict[str, List[Callable]] = {}

    # -- events ----------------------------------------------------------------

    def on(self, event: str, handler: Callable) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def emit_dialog(self, dialog: FakeDialog) -> FakeDialog:
        for handler in self._handlers.get("dialog", []):
            handler(dialog)
        return dialog

    # -- page API --------------------------------------------------------------

    def wait_for_timeout(self, timeout: float) -> None:
        self.clock.sleep(timeout / 1000)

    def goto(self, url: str, wait_until: str = "load", timeout: float = None) -> None:
        self.visited.append(url)
        self.url = url

    def is_closed(self) -> bool:
        return self.closed

    def close(self) -> None:
        self.closed = True

    def screenshot(self, full_page: bool = False) -> bytes:
        if self.screenshot_error:
            raise self.screenshot_error
        return PNG_BYTES

    def evaluate(self, script: str, arg: Any = None) -> Any:
        if "document.readyState" in script:
            state = self.ready_states[0]
            if len(self.ready_states) > 1:
                self.ready_states.pop(0)
            return state
        if "node.remove()" in script:
            if self.overlay_error:
                raise self.overlay_error
            self.removal_selectors.append(arg)
            removed, self.overlays = self.overlays, 0
            return removed
        raise NotImplementedError(f"FakePage cannot evaluate: {script!r}")
