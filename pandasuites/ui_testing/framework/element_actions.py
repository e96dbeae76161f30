# ================================================================================
# Element Actions Module
# ================================================================================
#
# The interaction toolkit every page model owns: wait, act and query
# primitives layered on the WaitEngine.
#
# Key Features:
#   - click / type_text wait first, then act; a stale element during the
#     action gets exactly one re-wait and one retry
#   - is_displayed never raises (safe for speculative checks)
#   - scroll_into_view / highlight are best-effort
#   - URL + title captured (log + Allure) before any failure is raised
#   - Targets are Locators or short-lived ElementHandles; a stale handle
#     is only retried when the caller can locate it again
#
# Usage:
#   actions = ElementActions(page, page_name="HomePage")
#   actions.click(Locator.css("a.read-more", "Read more"))
#   actions.type_text(search_input, "selenium", label="Search input")
#
# ================================================================================

from typing import Any, Callable, Dict, List, Optional

import allure
from loguru import logger
from playwright.sync_api import (
    ElementHandle,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from .exceptions import ActionFailed, WaitTimeout
from .smart_locator import Locator
from .wait_engine import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
    Target,
    WaitCondition,
    WaitEngine,
    capture_page_state,
    describe_element,
    is_stale_error,
)


HIGHLIGHT_SCRIPT = "el => { el.style.border = '3px solid red'; }"

# Finds a fresh handle for an element that went stale (None when gone)
Relocator = Callable[[], Optional[ElementHandle]]


class ElementActions:
    """
    Wait/act/query toolkit bound to one Playwright page.

    Page models hold an instance of this class instead of inheriting the
    primitives, so each page model is just its locators and business
    operations.

    Example:
        actions = ElementActions(page, page_name="ContactPage")
        actions.type_text(Locator.css("#contact-name"), "Jane")
        actions.click(Locator.xpath("//button[@type='submit']", "Submit"))
    """

    def __init__(
        self,
        page: Page,
        page_name: str = "Page",
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        waits: Optional[WaitEngine] = None,
    ):
        """
        Args:
            page: Playwright Page object
            page_name: Prefix for log lines (``[HomePage] ...``)
            timeout: Default wait timeout in seconds
            poll_interval: Default poll interval in seconds
            waits: Pre-built WaitEngine (overrides timeout/poll_interval)
        """
        self.page = page
        self.page_name = page_name
        self.waits = waits or WaitEngine(page, timeout=timeout, poll_interval=poll_interval)

    # ==================== Actions ====================

    def click(
        self,
        target: Target,
        label: Optional[str] = None,
        timeout: Optional[float] = None,
        relocate: Optional[Relocator] = None,
    ) -> None:
        """
        Wait until clickable, then click.

        A stale Locator target is looked up again for the retry. A stale
        handle is retried only through ``relocate``; without one it fails
        at once.

        Raises:
            WaitTimeout: The element never became clickable
            ActionFailed: The click was rejected, or failed again after the
                single stale-element retry
        """
        name = self._label(target, label)
        logger.info(f"[{self.page_name}] ACTION: Clicking on '{name}'")

        with allure.step(f"Click: {name}"):
            handle = self.waits.clickable(target, timeout=timeout, description=name)
            self._perform(
                "click", target, name, WaitCondition.CLICKABLE, timeout,
                handle, lambda element: element.click(), relocate,
            )

        logger.info(f"[{self.page_name}] SUCCESS: Clicked on '{name}'")

    def type_text(
        self,
        target: Target,
        text: str,
        label: Optional[str] = None,
        timeout: Optional[float] = None,
        relocate: Optional[Relocator] = None,
    ) -> None:
        """
        Wait until visible, clear the field, then type ``text``.

        Raises:
            WaitTimeout: The element never became visible
            ActionFailed: Typing was rejected, or failed again after the
                single stale-element retry
        """
        name = self._label(target, label)
        logger.info(f"[{self.page_name}] ACTION: Typing '{text}' into '{name}'")

        def clear_and_fill(element: ElementHandle) -> None:
            element.fill("")
            element.fill(text)

        with allure.step(f"Type '{text}' into: {name}"):
            handle = self.waits.visible(target, timeout=timeout, description=name)
            self._perform(
                "type into", target, name, WaitCondition.VISIBLE, timeout,
                handle, clear_and_fill, relocate,
            )

        logger.info(f"[{self.page_name}] SUCCESS: Typed '{text}' into '{name}'")

    def press_key(
        self,
        target: Target,
        key: str = "Enter",
        label: Optional[str] = None,
        timeout: Optional[float] = None,
        relocate: Optional[Relocator] = None,
    ) -> None:
        """Wait until visible, then press ``key`` on the element."""
        name = self._label(target, label)
        logger.info(f"[{self.page_name}] ACTION: Pressing '{key}' on '{name}'")

        handle = self.waits.visible(target, timeout=timeout, description=name)
        self._perform(
            f"press {key} on", target, name, WaitCondition.VISIBLE, timeout,
            handle, lambda element: element.press(key), relocate,
        )

    def read_text(
        self,
        target: Target,
        label: Optional[str] = None,
        timeout: Optional[float] = None,
        relocate: Optional[Relocator] = None,
    ) -> str:
        """Wait until visible and return the element's trimmed rendered text."""
        name = self._label(target, label)
        logger.debug(f"[{self.page_name}] Getting text from '{name}'")

        handle = self.waits.visible(target, timeout=timeout, description=name)
        text = self._perform(
            "get text from", target, name, WaitCondition.VISIBLE, timeout,
            handle, lambda element: (element.inner_text() or "").strip(), relocate,
        )
        logger.debug(f"[{self.page_name}] Got text '{text}' from '{name}'")
        return text

    # ==================== Queries ====================

    def is_displayed(
        self,
        target: Optional[Target],
        label: Optional[str] = None,
        timeout: float = 0,
    ) -> bool:
        """
        Whether the target is rendered and visible.

        Samples once by default; with ``timeout`` > 0 polls quietly for that
        long. Never raises: not-found, stale and driver errors all read as
        False.
        """
        if target is None:
            return False
        try:
            displayed = self.waits.satisfied_within(
                target, WaitCondition.VISIBLE, timeout=timeout
            )
        except PlaywrightError as e:
            logger.debug(f"[{self.page_name}] '{label or self._short(target)}' not displayed: {e}")
            return False

        logger.debug(f"[{self.page_name}] '{label or self._short(target)}' displayed: {displayed}")
        return displayed

    def find_all(self, locator: Locator) -> List[ElementHandle]:
        """All elements currently matching ``locator`` (document order)."""
        for attempt in (1, 2):
            try:
                return self.page.query_selector_all(locator.query)
            except PlaywrightError as e:
                if not is_stale_error(e):
                    raise
                logger.debug(
                    f"[{self.page_name}] Document changed while finding '{locator}' "
                    f"(attempt {attempt})"
                )
        logger.warning(f"[{self.page_name}] Could not enumerate '{locator}', treating as empty")
        return []

    def find_in(self, handle: ElementHandle, locator: Locator) -> Optional[ElementHandle]:
        """First descendant of ``handle`` matching ``locator``, or None."""
        try:
            return handle.query_selector(locator.query)
        except PlaywrightError as e:
            if not is_stale_error(e):
                raise
            return None

    def text_of(self, handle: ElementHandle) -> str:
        """Trimmed rendered text of a handle; empty when it went stale."""
        try:
            return (handle.inner_text() or "").strip()
        except PlaywrightError as e:
            if not is_stale_error(e):
                raise
            return ""

    def attribute_of(self, handle: ElementHandle, name: str) -> Optional[str]:
        """Attribute value of a handle; None when missing or stale."""
        try:
            return handle.get_attribute(name)
        except PlaywrightError as e:
            if not is_stale_error(e):
                raise
            return None

    def describe(self, handle: Any) -> str:
        return describe_element(handle)

    # ==================== Best-effort helpers ====================

    def scroll_into_view(self, target: Target, label: Optional[str] = None) -> None:
        """Scroll the element into view. Failures are logged, never raised."""
        name = label or self._short(target)
        logger.debug(f"[{self.page_name}] Scrolling to '{name}'")
        try:
            handle = self._resolve(target)
            if handle is None:
                logger.warning(f"[{self.page_name}] Could not scroll to '{name}': not found")
                return
            handle.scroll_into_view_if_needed()
        except PlaywrightError as e:
            logger.warning(f"[{self.page_name}] Could not scroll to '{name}': {e}")

    def highlight(self, target: Target, label: Optional[str] = None) -> None:
        """Outline the element (debug aid). Failures are logged, never raised."""
        name = label or self._short(target)
        try:
            handle = self._resolve(target)
            if handle is not None:
                handle.evaluate(HIGHLIGHT_SCRIPT)
                logger.debug(f"[{self.page_name}] Highlighted '{name}'")
        except PlaywrightError as e:
            logger.debug(f"[{self.page_name}] Could not highlight '{name}': {e}")

    def wait_for_page_load(self, timeout: Optional[float] = None) -> None:
        """Wait for the ``load`` event; a timeout is logged, not raised."""
        timeout = self.waits.timeout if timeout is None else timeout
        logger.debug(f"[{self.page_name}] Waiting for page load (timeout: {timeout:g}s)")
        try:
            self.page.wait_for_load_state("load", timeout=timeout * 1000)
            logger.debug(f"[{self.page_name}] Page load complete")
        except PlaywrightTimeoutError:
            logger.warning(f"[{self.page_name}] Page load timeout after {timeout:g}s")

    # ==================== Page state ====================

    def current_url(self) -> str:
        return self.page.url

    def page_title(self) -> str:
        return self.page.title()

    def capture_debug_info(self) -> Dict[str, str]:
        """Log the current URL and title and attach them to the report."""
        url, title = capture_page_state(self.page)
        logger.info(f"[{self.page_name}] PAGE STATE: URL='{url}', Title='{title}'")
        allure.attach(
            f"URL: {url}\nTitle: {title}",
            name=f"{self.page_name} state",
            attachment_type=allure.attachment_type.TEXT,
        )
        return {"url": url, "title": title}

    # ==================== Internals ====================

    def _perform(
        self,
        action: str,
        target: Target,
        name: str,
        condition: WaitCondition,
        timeout: Optional[float],
        handle: ElementHandle,
        operation: Callable[[ElementHandle], Any],
        relocate: Optional[Relocator] = None,
    ) -> Any:
        """
        Run ``operation`` on ``handle`` with the one-retry staleness rule.

        Returns:
            Whatever ``operation`` returned
        """
        try:
            return operation(handle)
        except PlaywrightError as e:
            if not is_stale_error(e):
                raise self._action_failed(action, name, e) from e
            stale = e

        try:
            retry_target = self._retry_target(target, relocate)
        except PlaywrightError as e:
            raise self._action_failed(action, name, e) from e
        if retry_target is None:
            logger.warning(f"[{self.page_name}] Stale element '{name}' could not be located again")
            raise self._action_failed(action, name, stale) from stale
        logger.warning(f"[{self.page_name}] RETRY: Stale element '{name}', retrying {action}")

        try:
            handle = self.waits.until(retry_target, condition, timeout=timeout, description=name)
            result = operation(handle)
        except (PlaywrightError, WaitTimeout) as e:
            raise self._action_failed(action, name, e) from e
        logger.info(f"[{self.page_name}] RETRY: '{name}' succeeded on the second attempt")
        return result

    def _retry_target(self, target: Target, relocate: Optional[Relocator]) -> Optional[Target]:
        """What to wait on for the retry; None when the element is gone for good."""
        if isinstance(target, Locator):
            return target
        if relocate is None:
            return None
        try:
            return relocate()
        except PlaywrightError as e:
            if not is_stale_error(e):
                raise
            return None

    def _action_failed(self, action: str, name: str, error: Exception) -> ActionFailed:
        url, title = capture_page_state(self.page)
        reason = str(error).splitlines()[0] if str(error) else type(error).__name__
        failure = ActionFailed(action, name, reason)
        logger.error(f"[{self.page_name}] {failure} | URL: {url} | Title: {title}")
        allure.attach(
            f"URL: {url}\nTitle: {title}\nAction: {action}\nError: {reason}",
            name=f"Action failed: {name}",
            attachment_type=allure.attachment_type.TEXT,
        )
        return failure

    def _resolve(self, target: Target) -> Optional[ElementHandle]:
        if isinstance(target, Locator):
            return self.page.query_selector(target.query)
        return target

    def _label(self, target: Target, label: Optional[str]) -> str:
        if label:
            return label
        return self.waits.describe(target)

    @staticmethod
    def _short(target: Any) -> str:
        if isinstance(target, Locator):
            return target.description
        return "element"


__all__ = ["ElementActions", "Relocator"]
