"""
================================================================================
Check Box Page Object
================================================================================

demoqa "Check Box" tree: expand all nodes, tick a node, read the result.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.toolkit import UiToolkit


class CheckBoxPage:
    """Check box tree page object."""

    URL_PATH = "checkbox"

    EXPAND_ALL = ElementReference.by_css("button[title='Expand all']", name="Expand all")
    NODE_TITLES = ElementReference.by_css("label[for^='tree-node-'] .rct-title", name="Tree node titles")
    HOME = ElementReference.by_xpath("//span[text()='Home']", name="Home node")
    CHECKED_ICONS = ElementReference.by_css(".rct-icon-check", name="Checked icons")
    RESULT = ElementReference.by_id("result", name="Result")

    def __init__(self, ui: UiToolkit):
        self.ui = ui

    def open(self) -> "CheckBoxPage":
        self.ui.open(self.URL_PATH)
        return self

    @allure.step("Expand all tree nodes")
    def expand_all(self) -> None:
        self.ui.interactor.click(self.EXPAND_ALL)

    @allure.step("Check the Home node")
    def check_home(self) -> None:
        self.ui.interactor.click(self.HOME)

    def check_node(self, title: str) -> None:
        """Tick the node whose title equals `title` (case-insensitive)."""
        self.ui.interactor.select_where_text_equals(self.NODE_TITLES, title)

    def checked_count(self) -> int:
        return self.ui.interactor.count(self.CHECKED_ICONS)

    def result_text(self) -> str:
        return self.ui.interactor.text_of(self.RESULT)
