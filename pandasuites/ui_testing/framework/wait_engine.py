# ================================================================================
# Wait Engine Module
# ================================================================================
#
# Fixed-interval polling of the live DOM for element conditions.
#
# Key Features:
#   - visible / clickable / absent / text_contains conditions
#   - Targets are Locators (re-resolved on every poll) or short-lived handles
#   - "Not found yet" and stale handles are transient; any other driver
#     error propagates immediately
#   - URL + title snapshot logged and attached to Allure on timeout
#   - Injectable clock and sleep (tests drive time explicitly)
#
# Usage:
#   engine = WaitEngine(page, timeout=10, poll_interval=0.5)
#   button = engine.clickable(Locator.css("button[type='submit']", "Submit"))
#   engine.absent(Locator.css(".spinner"), timeout=5)
#
# ================================================================================

import time
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Union

import allure
from loguru import logger
from playwright.sync_api import ElementHandle, Error as PlaywrightError, Page

from .exceptions import WaitTimeout
from .smart_locator import Locator


Target = Union[Locator, ElementHandle]

DEFAULT_TIMEOUT = 10.0
DEFAULT_POLL_INTERVAL = 0.5

# Driver messages that mean the node or its document went away
STALE_MARKERS = (
    "not attached to the DOM",
    "Element is detached",
    "Execution context was destroyed",
    "JSHandle is disposed",
    "Cannot find context with specified id",
)

_JS_TAG_NAME = "el => el.tagName.toLowerCase()"


class WaitCondition(str, Enum):
    VISIBLE = "visible"
    CLICKABLE = "clickable"
    ABSENT = "absent"
    TEXT_CONTAINS = "text_contains"


def is_stale_error(error: BaseException) -> bool:
    """True when a driver error reports a detached node or destroyed context."""
    if not isinstance(error, PlaywrightError):
        return False
    message = str(error)
    return any(marker in message for marker in STALE_MARKERS)


def capture_page_state(page: Page) -> Tuple[str, str]:
    """
    Current URL and title for diagnostics.

    Never raises: a page that cannot answer yields placeholders instead.
    """
    try:
        url = page.url
    except PlaywrightError as e:
        logger.debug(f"Could not read current URL: {e}")
        url = "[unavailable]"
    try:
        title = page.title()
    except PlaywrightError as e:
        logger.debug(f"Could not read page title: {e}")
        title = "[unavailable]"
    return url, title


def describe_element(handle: Any) -> str:
    """
    Synthesized description of an element for logs.

    Format: ``<tag id='..' name='..' class='..'> text='..'`` with the class
    truncated to 30 characters and the text to 20.
    """
    try:
        tag = handle.evaluate(_JS_TAG_NAME)
        element_id = handle.get_attribute("id") or ""
        name = handle.get_attribute("name") or ""
        css_class = handle.get_attribute("class") or ""
        text = (handle.inner_text() or "").strip()
    except PlaywrightError:
        return "[Unable to describe element]"

    if len(css_class) > 30:
        css_class = css_class[:30] + "..."
    if len(text) > 20:
        text = text[:20] + "..."
    return f"<{tag} id='{element_id}' name='{name}' class='{css_class}'> text='{text}'"


class WaitEngine:
    """
    Polls a condition on a target until it holds or the timeout elapses.

    A timed-out wait returns no earlier than ``timeout`` after it started and
    no later than ``timeout`` plus the cost of one final sample, because the
    last sleep is clipped to the time remaining.
    """

    def __init__(
        self,
        page: Page,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            page: Playwright page the locators are resolved against
            timeout: Default timeout in seconds
            poll_interval: Default delay between samples in seconds
            clock: Monotonic time source
            sleep: Blocking sleep function
        """
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        self.page = page
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    # ==================== Public API ====================

    def until(
        self,
        target: Target,
        condition: WaitCondition,
        *,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        expected_text: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Any:
        """
        Block until ``condition`` holds for ``target``.

        Returns:
            The satisfying handle for VISIBLE / CLICKABLE, True otherwise

        Raises:
            WaitTimeout: If the condition never held within the timeout
            playwright.sync_api.Error: For any non-transient driver error
        """
        condition = WaitCondition(condition)
        timeout = self.timeout if timeout is None else timeout
        label = description or self.describe(target)

        logger.debug(f"Waiting for '{label}' to be {condition.value} (timeout: {timeout:g}s)")

        satisfied, value, last_error = self._poll(
            target, condition, timeout, poll_interval, expected_text
        )
        if satisfied:
            logger.debug(f"'{label}' is now {condition.value}")
            return value

        url, title = capture_page_state(self.page)
        shown_condition = condition.value
        if condition is WaitCondition.TEXT_CONTAINS:
            shown_condition = f"containing text '{expected_text}'"
        error = WaitTimeout(label, shown_condition, timeout, url, title, last_error)
        logger.error(str(error))
        allure.attach(
            f"URL: {url}\nTitle: {title}\nCondition: {shown_condition}\nTimeout: {timeout:g}s",
            name=f"Wait timeout: {label}",
            attachment_type=allure.attachment_type.TEXT,
        )
        raise error

    def satisfied_within(
        self,
        target: Target,
        condition: WaitCondition,
        *,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        expected_text: Optional[str] = None,
    ) -> bool:
        """Quiet form of ``until``: no diagnostics, no raise, just the verdict."""
        timeout = self.timeout if timeout is None else timeout
        satisfied, _, _ = self._poll(
            target, WaitCondition(condition), timeout, poll_interval, expected_text
        )
        return satisfied

    def visible(self, target: Target, **kwargs) -> ElementHandle:
        return self.until(target, WaitCondition.VISIBLE, **kwargs)

    def clickable(self, target: Target, **kwargs) -> ElementHandle:
        return self.until(target, WaitCondition.CLICKABLE, **kwargs)

    def absent(self, target: Target, **kwargs) -> bool:
        return self.until(target, WaitCondition.ABSENT, **kwargs)

    def text_present(self, target: Target, expected_text: str, **kwargs) -> bool:
        return self.until(
            target, WaitCondition.TEXT_CONTAINS, expected_text=expected_text, **kwargs
        )

    def describe(self, target: Target) -> str:
        if isinstance(target, Locator):
            return target.description
        return describe_element(target)

    # ==================== Polling ====================

    def _poll(
        self,
        target: Target,
        condition: WaitCondition,
        timeout: float,
        poll_interval: Optional[float],
        expected_text: Optional[str],
    ) -> Tuple[bool, Any, Optional[str]]:
        interval = self.poll_interval if poll_interval is None else poll_interval
        deadline = self._clock() + timeout
        last_error: Optional[str] = None

        while True:
            try:
                satisfied, value = self._sample(target, condition, expected_text)
            except PlaywrightError as e:
                if not is_stale_error(e):
                    raise
                last_error = str(e).splitlines()[0] if str(e) else type(e).__name__
                # A vanished node is exactly what ABSENT waits for
                satisfied, value = condition is WaitCondition.ABSENT, True

            if satisfied:
                return True, value, last_error

            remaining = deadline - self._clock()
            if remaining <= 0:
                return False, None, last_error
            self._sleep(min(interval, remaining))

    def _resolve(self, target: Target) -> Optional[ElementHandle]:
        if isinstance(target, Locator):
            return self.page.query_selector(target.query)
        return target

    def _sample(
        self,
        target: Target,
        condition: WaitCondition,
        expected_text: Optional[str],
    ) -> Tuple[bool, Any]:
        """Evaluate the condition once against a freshly resolved element."""
        handle = self._resolve(target)

        if condition is WaitCondition.ABSENT:
            return handle is None or not handle.is_visible(), True

        if handle is None:
            return False, None

        if condition is WaitCondition.VISIBLE:
            return handle.is_visible(), handle

        if condition is WaitCondition.CLICKABLE:
            # Both flags come from the same handle in the same sample
            return handle.is_visible() and handle.is_enabled(), handle

        if condition is WaitCondition.TEXT_CONTAINS:
            if expected_text is None:
                raise ValueError("TEXT_CONTAINS requires expected_text")
            return expected_text in (handle.inner_text() or ""), True

        raise ValueError(f"Unsupported wait condition: {condition}")


__all__ = [
    "WaitCondition",
    "WaitEngine",
    "DEFAULT_TIMEOUT",
    "DEFAULT_POLL_INTERVAL",
    "STALE_MARKERS",
    "is_stale_error",
    "capture_page_state",
    "describe_element",
]
