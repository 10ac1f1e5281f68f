"""
================================================================================
Practice Form Page Object
================================================================================

demoqa "Student Registration Form".

The page is the most ad-heavy one on the site: the submit button regularly
sits under a sticky banner and the modal close button under an ad iframe.
Both clicks rely on the interactor's script fallback rather than on
page-specific workarounds.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import allure
from loguru import logger

from testsuites.ui_testing.framework.element_locator import ElementReference
from testsuites.ui_testing.framework.resilient_interactor import ActionPath
from testsuites.ui_testing.framework.toolkit import UiToolkit


MODAL_TITLE_TEXT = "Thanks for submitting the form"


@dataclass(frozen=True)
class StudentRegistration:
    """
    Values entered into the registration form.

    Attributes:
        first_name: First name
        last_name: Last name
        email: Email address
        gender: 'Male', 'Female' or 'Other'
        mobile: 10-digit phone number
        date_of_birth: Date typed into the picker (e.g. '15 May 1990')
        subjects: Subjects picked from the autocomplete
        hobbies: 'Sports', 'Reading' and/or 'Music'
        picture: Optional path of an image to upload
        current_address: Free-text address
    """
    first_name: str
    last_name: str
    email: str
    gender: str
    mobile: str
    date_of_birth: Optional[str] = None
    subjects: Sequence[str] = field(default_factory=tuple)
    hobbies: Sequence[str] = field(default_factory=tuple)
    picture: Optional[str] = None
    current_address: str = ""


class PracticeFormPage:
    """Student registration form page object."""

    URL_PATH = "automation-practice-form"

    FIRST_NAME = ElementReference.by_id("firstName", name="First name")
    LAST_NAME = ElementReference.by_id("lastName", name="Last name")
    EMAIL = ElementReference.by_id("userEmail", name="Email")
    GENDER_OPTIONS = ElementReference.by_css("[for^='gender-radio']", name="Gender options")
    MOBILE = ElementReference.by_id("userNumber", name="Mobile")
    DATE_OF_BIRTH = ElementReference.by_id("dateOfBirthInput", name="Date of birth")
    SUBJECTS = ElementReference.by_id("subjectsInput", name="Subjects")
    HOBBY_OPTIONS = ElementReference.by_css("[for^='hobbies-checkbox']", name="Hobby options")
    UPLOAD_PICTURE = ElementReference.by_id("uploadPicture", name="Upload picture")
    CURRENT_ADDRESS = ElementReference.by_id("currentAddress", name="Current address")
    SUBMIT = ElementReference.by_id("submit", name="Submit")
    MODAL_TITLE = ElementReference.by_id("example-modal-sizes-title-lg", name="Modal title")
    CLOSE_MODAL = ElementReference.by_id("closeLargeModal", name="Close modal")

    def __init__(self, ui: UiToolkit):
        self.ui = ui

    def open(self) -> "PracticeFormPage":
        self.ui.open(self.URL_PATH)
        return self

    # =========================================================================
    # Field actions
    # =========================================================================

    def enter_first_name(self, value: str) -> None:
        self.ui.interactor.type_text(self.FIRST_NAME, value)

    def enter_last_name(self, value: str) -> None:
        self.ui.interactor.type_text(self.LAST_NAME, value)

    def enter_email(self, value: str) -> None:
        self.ui.interactor.type_text(self.EMAIL, value)

    def select_gender(self, gender: str) -> None:
        self.ui.interactor.select_where_text_equals(self.GENDER_OPTIONS, gender)

    def enter_mobile(self, value: str) -> None:
        self.ui.interactor.type_text(self.MOBILE, value)

    def set_date_of_birth(self, value: str) -> None:
        """Type a date into the picker and confirm with Enter."""
        self.ui.interactor.type_text(self.DATE_OF_BIRTH, value, submit=True)

    def add_subject(self, subject: str) -> None:
        """Type into the autocomplete and accept the highlighted suggestion."""
        self.ui.interactor.type_text(self.SUBJECTS, subject, submit=True)

    def select_hobbies(self, hobbies: Sequence[str]) -> None:
        for hobby in hobbies:
            self.ui.interactor.select_where_text_equals(self.HOBBY_OPTIONS, hobby)

    def upload_picture(self, file_path: str) -> None:
        self.ui.interactor.upload_file(self.UPLOAD_PICTURE, file_path)

    def enter_address(self, value: str) -> None:
        self.ui.interactor.type_text(self.CURRENT_ADDRESS, value)

    # =========================================================================
    # Flows
    # =========================================================================

    @allure.step("Fill registration form")
    def fill(self, student: StudentRegistration) -> None:
        self.enter_first_name(student.first_name)
        self.enter_last_name(student.last_name)
        self.enter_email(student.email)
        self.select_gender(student.gender)
        self.enter_mobile(student.mobile)
        if student.date_of_birth:
            self.set_date_of_birth(student.date_of_birth)
        for subject in student.subjects:
            self.add_subject(subject)
        self.select_hobbies(student.hobbies)
        if student.picture:
            self.upload_picture(student.picture)
        if student.current_address:
            self.enter_address(student.current_address)

    @allure.step("Submit registration form")
    def submit(self) -> ActionPath:
        path = self.ui.interactor.click(self.SUBMIT)
        logger.info(f"Form submitted via {path.value} click")
        return path

    def is_modal_displayed(self) -> bool:
        return self.ui.interactor.is_displayed(self.MODAL_TITLE, wait=self.ui.policy)

    def modal_title(self) -> str:
        return self.ui.interactor.text_of(self.MODAL_TITLE)

    @allure.step("Close confirmation modal")
    def close_modal(self) -> None:
        self.ui.interactor.click(self.CLOSE_MODAL)
