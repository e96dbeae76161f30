"""
================================================================================
Contact Page Object
================================================================================

Page object for the blog's contact form (``/contact/``).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from ..framework.exceptions import WaitTimeout
from ..framework.page_base import BasePage
from ..framework.smart_locator import Locator

# Classes form plugins put on a field that failed validation
VALIDATION_ERROR_CLASSES = ("wpcf7-not-valid", "error", "invalid")


class ContactPage(BasePage):
    """
    Contact form.

    Usage:
        contact = ContactPage(page)
        contact.open()
        contact.fill_and_submit_contact_form("Jane", "jane@example.com", "Hello")
        assert contact.is_success_message_displayed()
    """

    URL_PATH = "/contact/"
    PAGE_NAME = "ContactPage"

    FIELD_TIMEOUT = 10
    SUBMIT_TIMEOUT = 20
    MESSAGE_TIMEOUT = 5

    # =========================================================================
    # Locators
    # =========================================================================

    CONTACT_FORM = Locator.css(
        "form.contact-form, form.wpcf7-form, #contact-form", "Contact Form"
    )
    NAME_FIELD = Locator.css(
        "input[name*='name'], input[id*='name'], "
        "input[placeholder*='name'], input[placeholder*='Name']",
        "Name Input Field",
    )
    EMAIL_FIELD = Locator.css(
        "input[name*='email'], input[id*='email'], input[type='email'], "
        "input[placeholder*='email'], input[placeholder*='Email']",
        "Email Input Field",
    )
    MESSAGE_FIELD = Locator.css(
        "textarea[name*='message'], textarea[id*='message'], "
        "textarea[placeholder*='message'], textarea[placeholder*='Message']",
        "Message Textarea",
    )
    SUBMIT_BUTTON = Locator.xpath("//button[.//strong[text()='Contact Me']]", "Submit Button")
    SUCCESS_MESSAGE = Locator.css("#contact-form-success-header", "Success Message")
    ERROR_MESSAGE = Locator.css(".contact-form__error.show-errors", "Error Message")

    # =========================================================================
    # Page state
    # =========================================================================

    def open(self) -> "ContactPage":
        self.navigate()
        return self

    @allure.step("Verify contact page is loaded")
    def is_contact_page_loaded(self) -> bool:
        """
        True on a ``contact`` URL showing the form, or at least the name and
        email fields.
        """
        logger.info(f"[{self.PAGE_NAME}] Verifying contact page is loaded...")
        self.wait_for_page_load()

        is_contact_url = "contact" in (self.get_current_url() or "")
        form_present = self.actions.is_displayed(self.CONTACT_FORM)
        name_present = self.actions.is_displayed(self.NAME_FIELD)
        email_present = self.actions.is_displayed(self.EMAIL_FIELD)

        loaded = is_contact_url and (form_present or (name_present and email_present))
        summary = (
            f"URL: {is_contact_url} | Form: {form_present} | "
            f"Name: {name_present} | Email: {email_present}"
        )
        if loaded:
            logger.info(f"[{self.PAGE_NAME}] VERIFIED: Contact page loaded successfully | {summary}")
        else:
            logger.warning(f"[{self.PAGE_NAME}] VERIFICATION FAILED: Contact page may not be fully loaded | {summary}")
            self.actions.capture_debug_info()
        return loaded

    # =========================================================================
    # Form input
    # =========================================================================

    def enter_name(self, name: str) -> None:
        self.actions.type_text(self.NAME_FIELD, name, timeout=self.FIELD_TIMEOUT)

    def enter_email(self, email: str) -> None:
        self.actions.type_text(self.EMAIL_FIELD, email, timeout=self.FIELD_TIMEOUT)

    def enter_message(self, message: str) -> None:
        self.actions.type_text(self.MESSAGE_FIELD, message, timeout=self.FIELD_TIMEOUT)

    def submit_form(self) -> None:
        logger.info(f"[{self.PAGE_NAME}] ========== FORM SUBMISSION ==========")
        self.actions.click(self.SUBMIT_BUTTON, timeout=self.SUBMIT_TIMEOUT)
        logger.info(f"[{self.PAGE_NAME}] SUCCESS: Form submitted")

    @allure.step("Fill and submit contact form")
    def fill_and_submit_contact_form(self, name: str, email: str, message: str) -> None:
        logger.info(f"[{self.PAGE_NAME}] Filling contact form with name: '{name}', email: '{email}'")
        self.enter_name(name)
        self.enter_email(email)
        self.enter_message(message)
        self.submit_form()

    # =========================================================================
    # Outcome
    # =========================================================================

    def is_success_message_displayed(self) -> bool:
        displayed = self.actions.is_displayed(self.SUCCESS_MESSAGE, timeout=self.MESSAGE_TIMEOUT)
        logger.info(f"[{self.PAGE_NAME}] Success message displayed: {displayed}")
        return displayed

    def is_error_message_displayed(self) -> bool:
        displayed = self.actions.is_displayed(self.ERROR_MESSAGE)
        logger.info(f"[{self.PAGE_NAME}] Error message displayed: {displayed}")
        return displayed

    def get_success_message_text(self) -> str:
        return self._message_text(self.SUCCESS_MESSAGE)

    def get_error_message_text(self) -> str:
        return self._message_text(self.ERROR_MESSAGE)

    def _message_text(self, locator: Locator) -> str:
        try:
            text = self.actions.read_text(locator, timeout=self.MESSAGE_TIMEOUT)
        except WaitTimeout:
            logger.info(f"[{self.PAGE_NAME}] {locator.name} not shown")
            return ""
        logger.info(f"[{self.PAGE_NAME}] {locator.name}: '{text}'")
        return text

    def is_email_validation_error_displayed(self) -> bool:
        return self._has_validation_error(self.EMAIL_FIELD)

    def is_message_validation_error_displayed(self) -> bool:
        return self._has_validation_error(self.MESSAGE_FIELD)

    def _has_validation_error(self, field: Locator) -> bool:
        """Whether the field carries one of the validation error classes."""
        elements = self.actions.find_all(field)
        if not elements:
            logger.info(f"[{self.PAGE_NAME}] {field.name} not found")
            return False
        classes: Optional[str] = self.actions.attribute_of(elements[0], "class")
        has_error = bool(set((classes or "").split()) & set(VALIDATION_ERROR_CLASSES))
        logger.info(f"[{self.PAGE_NAME}] {field.name} validation error: {has_error}")
        return has_error


__all__ = ["ContactPage"]
