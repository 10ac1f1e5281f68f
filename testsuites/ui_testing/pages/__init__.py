"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for demoqa.com pages.

Each page class encapsulates:
    - Element references (logical locators, never live handles)
    - Page-specific actions delegated to the UiToolkit
    - Verification reads

Author: Automation Team
License: MIT
================================================================================
"""

from .alerts_page import AlertsPage
from .buttons_page import ButtonsPage
from .check_box_page import CheckBoxPage
from .date_picker_page import DatePickerPage
from .frames_page import FramesPage
from .practice_form_page import MODAL_TITLE_TEXT, PracticeFormPage, StudentRegistration
from .progress_bar_page import ProgressBarPage
from .radio_button_page import RadioButtonPage
from .slider_page import SliderPage
from .text_box_page import TextBoxPage

__all__ = [
    "AlertsPage",
    "ButtonsPage",
    "CheckBoxPage",
    "DatePickerPage",
    "FramesPage",
    "MODAL_TITLE_TEXT",
    "PracticeFormPage",
    "ProgressBarPage",
    "RadioButtonPage",
    "SliderPage",
    "StudentRegistration",
    "TextBoxPage",
]
