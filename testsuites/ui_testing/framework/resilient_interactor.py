# ================================================================================
# Resilient Interactor Module
# ================================================================================
#
# Click / type / select / scroll against pages whose DOM keeps changing under
# the test: ads load late, React re-renders replace nodes, overlays intercept
# pointer events.
#
# Per action:
#   Located -> WaitingClickable -> Acting -> Done
#
# Recovery edges:
#   - StaleReferenceError anywhere in an attempt: re-resolve and try once more;
#     a second stale failure is fatal (InteractionError)
#   - any other native failure: suppress overlays, then perform the
#     script-driven equivalent; if that fails too, InteractionError
#
# Every action returns the ActionPath that performed it, so callers and tests
# can see when the script fallback fired.
#
# ================================================================================

from enum import Enum
from typing import Any, Callable, List, Optional, TypeVar

import allure
from loguru import logger
from playwright.sync_api import ElementHandle
from playwright.sync_api import Error as PlaywrightError

from .element_locator import ElementLocator, ElementReference
from .exceptions import (
    ElementNotFoundError,
    InteractionError,
    OptionNotFoundError,
    StaleReferenceError,
    WaitTimeoutError,
)
from .readiness_gate import PageReadinessGate
from .session import BrowserSession
from .wait_policy import WaitPolicy


T = TypeVar("T")


class ActionPath(str, Enum):
    """Which mechanism performed an action."""
    NATIVE = "native"
    SCRIPT = "script"


# Playwright error messages meaning the handle no longer maps to a live node
STALE_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "is disposed",
    "execution context was destroyed",
)

# --------------------------------------------------------------------------
# Page scripts. Every script that acts returns false for a detached element
# so a fallback can never report success against a dead node.
# --------------------------------------------------------------------------

SCROLL_SCRIPT = "(el) => el.scrollIntoView({behavior: 'smooth', block: 'center'})"

STATE_SCRIPT = """
(el) => {
    if (!el.isConnected) return null;
    const style = window.getComputedStyle(el);
    const rect = el.getBoundingClientRect();
    const visible = style.visibility !== 'hidden' && style.display !== 'none'
        && rect.width > 0 && rect.height > 0;
    const enabled = !el.disabled && el.getAttribute('aria-disabled') !== 'true';
    const editable = enabled && !el.readOnly;
    return {visible, enabled, editable};
}
"""

CLICK_SCRIPT = """
(el) => {
    if (!el.isConnected) return false;
    el.click();
    return true;
}
"""

MOUSE_EVENT_SCRIPT = """
(el, eventType) => {
    if (!el.isConnected) return false;
    const button = eventType === 'contextmenu' ? 2 : 0;
    el.dispatchEvent(new MouseEvent(eventType, {bubbles: true, cancelable: true, button}));
    return true;
}
"""

SET_VALUE_SCRIPT = """
(el, args) => {
    if (!el.isConnected) return false;
    const proto = el instanceof HTMLTextAreaElement
        ? HTMLTextAreaElement.prototype
        : HTMLInputElement.prototype;
    const setter = Object.getOwnPropertyDescriptor(proto, 'value').set;
    setter.call(el, args.value);
    el.dispatchEvent(new Event('input', {bubbles: true}));
    el.dispatchEvent(new Event('change', {bubbles: true}));
    if (args.submit) {
        for (const type of ['keydown', 'keypress', 'keyup']) {
            el.dispatchEvent(new KeyboardEvent(type, {key: 'Enter', code: 'Enter', keyCode: 13, bubbles: true}));
        }
    }
    return true;
}
"""

OPTIONS_SCRIPT = "(el) => Array.from(el.options || []).map((o) => ({text: o.text, value: o.value}))"

SELECT_VALUE_SCRIPT = """
(el, value) => {
    if (!el.isConnected) return false;
    el.value = value;
    el.dispatchEvent(new Event('input', {bubbles: true}));
    el.dispatchEvent(new Event('change', {bubbles: true}));
    return true;
}
"""


def is_stale_error(error: BaseException) -> bool:
    """True if a Playwright error means the handle went stale."""
    if isinstance(error, StaleReferenceError):
        return True
    if not isinstance(error, PlaywrightError):
        return False
    message = str(error).lower()
    return any(marker in message for marker in STALE_MARKERS)


def call_on_handle(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Invoke a handle method, translating detached-node errors."""
    try:
        return fn(*args, **kwargs)
    except PlaywrightError as e:
        if is_stale_error(e):
            raise StaleReferenceError(str(e)) from e
        raise


class ResilientInteractor:
    """
    Element actions with wait, script fallback and stale-reference recovery.

    Example:
        interactor = ResilientInteractor(session, policy, gate=gate)
        interactor.type_text(first_name, "John")
        path = interactor.click(submit)   # ActionPath.NATIVE normally
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        session: BrowserSession,
        policy: WaitPolicy,
        locator: Optional[ElementLocator] = None,
        gate: Optional[PageReadinessGate] = None,
        native_timeout: Optional[float] = None,
    ):
        """
        Args:
            session: Browser session to act on
            policy: Wait policy for element resolution and clickability
            locator: Element locator (one is created for the session if None)
            gate: Readiness gate used to re-suppress overlays on recovery paths
            native_timeout: Seconds a native Playwright action may take before
                it counts as failed (defaults to the policy timeout)
        """
        self.session = session
        self.policy = policy
        self.locator = locator or ElementLocator(session)
        self.gate = gate
        self.native_timeout = native_timeout or policy.timeout

    @property
    def _native_timeout_ms(self) -> float:
        return self.native_timeout * 1000

    # =========================================================================
    # Actions
    # =========================================================================

    def click(self, ref: ElementReference) -> ActionPath:
        """Click an element (native click, script click as fallback)."""
        with allure.step(f"Click: {ref.label}"):
            return self._retry_stale(ref, "click", lambda: self._act_on(
                self._resolve(ref), ref, "click",
                native=lambda h: h.click(timeout=self._native_timeout_ms),
                script=lambda h: h.evaluate(CLICK_SCRIPT),
            ))

    def double_click(self, ref: ElementReference) -> ActionPath:
        """Double-click an element."""
        with allure.step(f"Double click: {ref.label}"):
            return self._retry_stale(ref, "double click", lambda: self._act_on(
                self._resolve(ref), ref, "double click",
                native=lambda h: h.dblclick(timeout=self._native_timeout_ms),
                script=lambda h: h.evaluate(MOUSE_EVENT_SCRIPT, "dblclick"),
            ))

    def context_click(self, ref: ElementReference) -> ActionPath:
        """Right-click an element."""
        with allure.step(f"Right click: {ref.label}"):
            return self._retry_stale(ref, "right click", lambda: self._act_on(
                self._resolve(ref), ref, "right click",
                native=lambda h: h.click(button="right", timeout=self._native_timeout_ms),
                script=lambda h: h.evaluate(MOUSE_EVENT_SCRIPT, "contextmenu"),
            ))

    def type_text(self, ref: ElementReference, text: str, submit: bool = False) -> ActionPath:
        """
        Replace the value of an input with `text`.

        Args:
            ref: Input or textarea reference
            text: Text to enter (existing content is cleared)
            submit: Press Enter after typing
        """
        def native(handle: ElementHandle) -> None:
            handle.fill(text, timeout=self._native_timeout_ms)
            if submit:
                handle.press("Enter", timeout=self._native_timeout_ms)

        shown = text if len(text) <= 50 else f"{text[:50]}..."
        with allure.step(f"Type into {ref.label}: {shown}"):
            return self._retry_stale(ref, "type", lambda: self._act_on(
                self._resolve(ref), ref, "type",
                native=native,
                script=lambda h: h.evaluate(SET_VALUE_SCRIPT, {"value": text, "submit": submit}),
                ready="editable",
            ))

    def select_option(self, ref: ElementReference, label: str) -> ActionPath:
        """
        Select an option of a native <select> by its visible text.

        Matching is case-insensitive and exact. Nothing is changed when no
        option matches.

        Raises:
            OptionNotFoundError: If no option text matches `label`
        """
        def attempt() -> ActionPath:
            handle = self._resolve(ref)
            options = call_on_handle(handle.evaluate, OPTIONS_SCRIPT) or []
            wanted = _normalize(label)
            value = next((o["value"] for o in options if _normalize(o["text"]) == wanted), None)
            if value is None:
                raise OptionNotFoundError(
                    f"No option of '{ref.label}' has text '{label}' "
                    f"(options: {[o['text'] for o in options]})"
                )
            return self._act_on(
                handle, ref, "select",
                native=lambda h: h.select_option(value=value, timeout=self._native_timeout_ms),
                script=lambda h: h.evaluate(SELECT_VALUE_SCRIPT, value),
            )

        with allure.step(f"Select '{label}' in {ref.label}"):
            return self._retry_stale(ref, "select", attempt)

    def select_where_text_equals(self, ref: ElementReference, text: str) -> ActionPath:
        """
        Click the first candidate whose visible text equals `text`.

        Candidates are every element matched by `ref` (radio labels, checkbox
        labels, list items). Comparison is case-insensitive and exact; there
        is no partial matching. Nothing is clicked when no candidate matches.

        Raises:
            OptionNotFoundError: If no candidate matches
        """
        def attempt() -> ActionPath:
            try:
                candidates = list(self.locator.resolve_all(ref, wait=self.policy))
            except ElementNotFoundError as e:
                raise OptionNotFoundError(f"No candidates for '{ref.label}' to match '{text}'") from e

            wanted = _normalize(text)
            seen: List[str] = []
            for candidate in candidates:
                candidate_text = call_on_handle(candidate.inner_text)
                seen.append(candidate_text.strip())
                if _normalize(candidate_text) == wanted:
                    return self._act_on(
                        candidate, ref, "select",
                        native=lambda h: h.click(timeout=self._native_timeout_ms),
                        script=lambda h: h.evaluate(CLICK_SCRIPT),
                    )

            raise OptionNotFoundError(
                f"No candidate of '{ref.label}' has text '{text}' (candidates: {seen})"
            )

        with allure.step(f"Select '{text}' from {ref.label}"):
            return self._retry_stale(ref, "select", attempt)

    def scroll_into_view(self, ref: ElementReference) -> None:
        """Scroll an element to the center of the viewport."""
        self._retry_stale(ref, "scroll", lambda: self._scroll(self._resolve(ref)))

    def upload_file(self, ref: ElementReference, file_path: str) -> None:
        """Set the file of an <input type=file> (hidden inputs are fine)."""
        with allure.step(f"Upload file to {ref.label}"):
            self._retry_stale(ref, "upload", lambda: call_on_handle(
                self._resolve(ref).set_input_files, file_path, timeout=self._native_timeout_ms,
            ))

    def set_value_by_script(self, ref: ElementReference, value: Any) -> ActionPath:
        """
        Assign an input's value directly and fire input/change events.

        For widgets whose native interaction is pointer-geometry driven
        (range sliders, date-time pickers).
        """
        def attempt() -> ActionPath:
            handle = self._resolve(ref)
            self._scroll(handle)
            self._run_script(handle, lambda h: h.evaluate(
                SET_VALUE_SCRIPT, {"value": str(value), "submit": False}
            ))
            return ActionPath.SCRIPT

        with allure.step(f"Set {ref.label} = {value}"):
            return self._retry_stale(ref, "set value", attempt)

    # =========================================================================
    # Reads and waits
    # =========================================================================

    def text_of(self, ref: ElementReference) -> str:
        """Visible text of an element once it is displayed."""
        def attempt() -> str:
            handle = self._resolve(ref)
            self._wait_ready(handle, ref, "visible")
            return call_on_handle(handle.inner_text)

        return self._retry_stale(ref, "read text", attempt)

    def attribute_of(self, ref: ElementReference, name: str) -> Optional[str]:
        """Current value of an attribute (None when absent)."""
        return self._retry_stale(
            ref, "read attribute",
            lambda: call_on_handle(self._resolve(ref).get_attribute, name),
        )

    def value_of(self, ref: ElementReference) -> str:
        """Current `value` property of an input."""
        return self._retry_stale(
            ref, "read value",
            lambda: call_on_handle(self._resolve(ref).input_value),
        )

    def is_displayed(self, ref: ElementReference, wait: Optional[WaitPolicy] = None) -> bool:
        """
        Check whether an element is attached and visible.

        Args:
            ref: Element reference
            wait: Keep checking under this policy; a single check when None

        Returns:
            True if visible, False otherwise (never raises for absence)
        """
        def visible() -> bool:
            state = self._state(self.locator.resolve(ref))
            return bool(state and state["visible"])

        if wait is None:
            try:
                return visible()
            except (ElementNotFoundError, StaleReferenceError, PlaywrightError):
                return False

        try:
            return wait.until(
                visible,
                description=f"'{ref.label}' to be visible",
                ignored=(ElementNotFoundError, StaleReferenceError, PlaywrightError),
                sleep=self.session.pause,
            )
        except WaitTimeoutError:
            return False

    def is_enabled(self, ref: ElementReference) -> bool:
        """Whether the element is enabled (not disabled / aria-disabled)."""
        def attempt() -> bool:
            state = self._state(self._resolve(ref))
            if state is None:
                raise StaleReferenceError(f"'{ref.label}' detached while reading state")
            return bool(state["enabled"])

        return self._retry_stale(ref, "read state", attempt)

    def count(self, ref: ElementReference) -> int:
        """Number of elements currently matching `ref`."""
        return sum(1 for _ in self.locator.resolve_all(ref))

    def wait_for_attribute(
        self,
        ref: ElementReference,
        name: str,
        expected: str,
        policy: Optional[WaitPolicy] = None,
    ) -> str:
        """
        Poll until an attribute equals `expected` exactly.

        The element is re-resolved on every poll, so re-renders between
        polls are harmless.

        Raises:
            WaitTimeoutError: If the value never matched
        """
        policy = policy or self.policy

        def matches() -> Optional[str]:
            value = self.locator.resolve(ref).get_attribute(name)
            return value if value == expected else None

        with allure.step(f"Wait for {ref.label}[{name}] == {expected!r}"):
            return policy.until(
                matches,
                description=f"{ref.label}[{name}] == {expected!r}",
                ignored=(ElementNotFoundError, PlaywrightError),
                sleep=self.session.pause,
            )

    def wait_for_attribute_change(
        self,
        ref: ElementReference,
        name: str,
        away_from: str,
        policy: Optional[WaitPolicy] = None,
    ) -> str:
        """
        Poll until an attribute holds a non-empty value other than `away_from`.

        Returns:
            The new attribute value
        """
        policy = policy or self.policy

        def changed() -> Optional[str]:
            value = self.locator.resolve(ref).get_attribute(name)
            return value if value not in (None, "", away_from) else None

        return policy.until(
            changed,
            description=f"{ref.label}[{name}] != {away_from!r}",
            ignored=(ElementNotFoundError, PlaywrightError),
            sleep=self.session.pause,
        )

    # =========================================================================
    # State machine internals
    # =========================================================================

    def _resolve(self, ref: ElementReference) -> ElementHandle:
        return self.locator.resolve(ref, wait=self.policy)

    def _retry_stale(self, ref: ElementReference, operation: str, attempt: Callable[[], T]) -> T:
        """Run `attempt`, re-running it once if the element went stale."""
        last_error: Optional[StaleReferenceError] = None
        for attempt_no in range(1, self.MAX_ATTEMPTS + 1):
            try:
                return attempt()
            except StaleReferenceError as e:
                last_error = e
                if attempt_no < self.MAX_ATTEMPTS:
                    logger.warning(
                        f"Stale reference to '{ref.label}' during {operation}; re-resolving"
                    )
                    self._suppress_overlays()

        message = f"{operation} on '{ref.label}' failed: element went stale {self.MAX_ATTEMPTS} times"
        logger.error(message)
        raise InteractionError(message) from last_error

    def _act_on(
        self,
        handle: ElementHandle,
        ref: ElementReference,
        action: str,
        native: Callable[[ElementHandle], Any],
        script: Callable[[ElementHandle], Any],
        ready: str = "clickable",
    ) -> ActionPath:
        self._scroll(handle)
        self._wait_ready(handle, ref, ready)

        try:
            call_on_handle(native, handle)
            logger.debug(f"{action} on '{ref.label}' done (native)")
            return ActionPath.NATIVE
        except StaleReferenceError:
            raise
        except Exception as e:
            native_error = e

        logger.warning(
            f"Native {action} on '{ref.label}' failed, falling back to script: "
            f"{_first_line(native_error)}"
        )
        self._suppress_overlays()
        try:
            self._run_script(handle, script)
        except StaleReferenceError:
            raise
        except Exception as script_error:
            message = (
                f"{action} on '{ref.label}' failed: native ({native_error}) "
                f"and script ({script_error})"
            )
            logger.error(message)
            raise InteractionError(message) from script_error

        logger.info(f"{action} on '{ref.label}' done via script fallback")
        return ActionPath.SCRIPT

    def _run_script(self, handle: ElementHandle, script: Callable[[ElementHandle], Any]) -> None:
        performed = call_on_handle(script, handle)
        if performed is False:
            raise StaleReferenceError("Element detached before the script action ran")

    def _scroll(self, handle: ElementHandle) -> None:
        call_on_handle(handle.evaluate, SCROLL_SCRIPT)

    def _state(self, handle: ElementHandle) -> Optional[dict]:
        return call_on_handle(handle.evaluate, STATE_SCRIPT)

    def _wait_ready(self, handle: ElementHandle, ref: ElementReference, ready: str) -> None:
        """Wait until the handle is visible and, per `ready`, enabled or editable."""
        def check() -> bool:
            state = self._state(handle)
            if state is None:
                raise StaleReferenceError(f"'{ref.label}' detached while waiting to be {ready}")
            if ready == "visible":
                return bool(state["visible"])
            if ready == "editable":
                return bool(state["visible"] and state["editable"])
            return bool(state["visible"] and state["enabled"])

        self.policy.until(
            check,
            description=f"'{ref.label}' to be {ready}",
            ignored=(PlaywrightError,),
            sleep=self.session.pause,
        )

    def _suppress_overlays(self) -> None:
        if self.gate is not None:
            self.gate.suppress_overlays()


def _normalize(text: str) -> str:
    return (text or "").strip().casefold()


def _first_line(error: BaseException) -> str:
    lines = str(error).splitlines()
    return lines[0] if lines else type(error).__name__


__all__ = [
    "ActionPath",
    "ResilientInteractor",
    "is_stale_error",
    "call_on_handle",
]
