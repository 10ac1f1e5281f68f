"""
================================================================================
Element Locator
================================================================================

Resolves logical element references to live Playwright handles.

    - ElementReference: strategy + selector (+ optional fallbacks), declared
      once per page object and safe to keep forever
    - ElementLocator: fresh DOM query on every call, no handle caching
    - Fallback selector usage tracking for maintenance insights

A resolved ElementHandle is only valid for the operation that asked for it;
ads loading and React re-renders can detach it at any time afterwards.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from loguru import logger
from playwright.sync_api import ElementHandle
from playwright.sync_api import Error as PlaywrightError

from .exceptions import ElementNotFoundError, WaitTimeoutError
from .session import BrowserSession
from .wait_policy import WaitPolicy


# Selector engine prefix per locator strategy
STRATEGIES: Dict[str, str] = {
    "css": "{}",
    "id": "[id='{}']",
    "xpath": "xpath={}",
    "text": "text={}",
}


@dataclass(frozen=True)
class ElementReference:
    """
    Logical locator for an element (never a live handle).

    Attributes:
        selector: Primary selector value, interpreted by `strategy`
        strategy: One of 'css', 'id', 'xpath', 'text'
        name: Human-readable element name for logs and Allure steps
        fallbacks: Extra selector values (same strategy) tried in order
    """
    selector: str
    strategy: str = "css"
    name: str = ""
    fallbacks: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown locator strategy '{self.strategy}'. "
                f"Expected one of: {', '.join(STRATEGIES)}"
            )
        if not self.selector:
            raise ValueError("selector must not be empty")

    @classmethod
    def by_id(cls, element_id: str, name: str = "") -> "ElementReference":
        return cls(element_id, strategy="id", name=name or element_id)

    @classmethod
    def by_css(cls, selector: str, name: str = "", fallbacks: Tuple[str, ...] = ()) -> "ElementReference":
        return cls(selector, strategy="css", name=name, fallbacks=tuple(fallbacks))

    @classmethod
    def by_xpath(cls, xpath: str, name: str = "") -> "ElementReference":
        return cls(xpath, strategy="xpath", name=name)

    @property
    def label(self) -> str:
        return self.name or self.selector

    def playwright_selectors(self) -> List[Tuple[str, str]]:
        """Return (strategy_name, playwright selector) pairs, primary first."""
        template = STRATEGIES[self.strategy]
        pairs = [("primary", template.format(self.selector))]
        for i, fb in enumerate(self.fallbacks, start=1):
            pairs.append((f"fallback_{i}", template.format(fb)))
        return pairs


@dataclass
class LocatorHealth:
    """
    Records which selector actually matched for an element.

    Attributes:
        element_name: Human-readable element name
        primary_selector: The preferred selector
        used_fallback: Whether a fallback was used
        fallback_name: Name of fallback used (if any)
        fallback_selector: The fallback selector used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


class ElementLocator:
    """
    Fresh-query element resolution against a browser session.

    Queries always target the session's current browsing context, so a
    reference resolves inside an iframe after FrameNavigator.enter() and in
    the top-level document otherwise.

    Usage:
        >>> locator = ElementLocator(session)
        >>> handle = locator.resolve(ElementReference.by_id("submit"), wait=policy)
        >>> for option in locator.resolve_all(gender_labels):
        ...     print(option.inner_text())
    """

    def __init__(self, session: BrowserSession):
        """
        Args:
            session: Browser session whose current context is queried
        """
        self.session = session
        self._fallback_used: Dict[str, LocatorHealth] = {}

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, ref: ElementReference, wait: Optional[WaitPolicy] = None) -> ElementHandle:
        """
        Resolve `ref` to a live handle with a fresh DOM query.

        Args:
            ref: Element reference to resolve
            wait: Poll under this policy until the element appears;
                a single query when None

        Returns:
            ElementHandle for the first match

        Raises:
            ElementNotFoundError: When nothing matches (after the wait, if any)
        """
        if wait is None:
            handle = self._find(ref)
            if handle is None:
                raise ElementNotFoundError(self._not_found_message(ref))
            return handle

        try:
            return wait.until(
                lambda: self._find(ref),
                description=f"element '{ref.label}' to be attached",
                ignored=(PlaywrightError,),
                sleep=self.session.pause,
            )
        except WaitTimeoutError as e:
            message = self._not_found_message(ref, waited=e.elapsed)
            logger.error(message)
            raise ElementNotFoundError(message) from e

    def resolve_all(
        self,
        ref: ElementReference,
        wait: Optional[WaitPolicy] = None,
    ) -> Iterator[ElementHandle]:
        """
        Resolve every match of `ref`, in DOM order at resolution time.

        Args:
            ref: Element reference matching several nodes (e.g. option labels)
            wait: Poll under this policy until at least one match exists

        Returns:
            One-shot iterator over the handles found

        Raises:
            ElementNotFoundError: When `wait` is given and nothing ever matched
        """
        if wait is None:
            return iter(self._find_all(ref))

        try:
            handles = wait.until(
                lambda: self._find_all(ref) or None,
                description=f"elements '{ref.label}' to be attached",
                ignored=(PlaywrightError,),
                sleep=self.session.pause,
            )
        except WaitTimeoutError as e:
            raise ElementNotFoundError(self._not_found_message(ref, waited=e.elapsed)) from e
        return iter(handles)

    # =========================================================================
    # Internals
    # =========================================================================

    def _find(self, ref: ElementReference) -> Optional[ElementHandle]:
        context = self.session.context
        for strategy_name, selector in ref.playwright_selectors():
            handle = context.query_selector(selector)
            if handle is not None:
                self._record(ref, strategy_name, selector)
                return handle
        return None

    def _find_all(self, ref: ElementReference) -> List[ElementHandle]:
        context = self.session.context
        for strategy_name, selector in ref.playwright_selectors():
            handles = context.query_selector_all(selector)
            if handles:
                self._record(ref, strategy_name, selector)
                return list(handles)
        return []

    def _record(self, ref: ElementReference, strategy_name: str, selector: str) -> None:
        if strategy_name == "primary":
            return
        if ref.label not in self._fallback_used:
            logger.warning(
                f"⚠️ Element '{ref.label}' used fallback: {strategy_name} -> {selector}"
            )
        self._fallback_used[ref.label] = LocatorHealth(
            element_name=ref.label,
            primary_selector=ref.playwright_selectors()[0][1],
            used_fallback=True,
            fallback_name=strategy_name,
            fallback_selector=selector,
        )

    @staticmethod
    def _not_found_message(ref: ElementReference, waited: Optional[float] = None) -> str:
        tried = ", ".join(sel for _, sel in ref.playwright_selectors())
        suffix = f" after {waited:.1f}s" if waited is not None else ""
        return f"❌ No element matched '{ref.label}'{suffix} (tried: {tried})"

    @property
    def fallbacks_used(self) -> int:
        """Number of elements that matched only through a fallback selector."""
        return len(self._fallback_used)

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Returns:
            Formatted report of elements that needed a fallback selector
        """
        if not self._fallback_used:
            return "✅ All elements used primary locators. No maintenance needed."

        report_lines = [
            "⚠️ Locator Health Report - Fallbacks Used:",
            "",
        ]
        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])
        return "\n".join(report_lines)


__all__ = [
    "ElementReference",
    "ElementLocator",
    "LocatorHealth",
    "STRATEGIES",
]
