"""
================================================================================
Base Page Object
================================================================================

Foundation class for the page models.

Provides:
    - Navigation and URL handling
    - The shared ElementActions toolkit (``self.actions``)
    - Title collection over fallback chains and click-by-title

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import allure
from loguru import logger
from playwright.sync_api import ElementHandle, Page

from .element_actions import ElementActions, Relocator
from .exceptions import NotFound
from .smart_locator import Locator, SmartLocator, TitleSource, link_text_locator
from .text_matching import find_title_match
from .ui_config import UIConfig


LINK_INSIDE = Locator.css("a", "link inside element")
LINK_AROUND = Locator.xpath("ancestor::a[1]", "enclosing link")

# (title text, title element)
TitleEntry = Tuple[str, ElementHandle]


class BasePage:
    """
    Base class for all page objects.

    A page model is its locators plus business operations; every wait,
    action and query goes through ``self.actions``.

    Usage:
        class AboutPage(BasePage):
            URL_PATH = "/about/"
            PAGE_NAME = "AboutPage"

            HEADING = Locator.css("h1.entry-title", "About heading")

            def get_heading(self) -> str:
                return self.actions.read_text(self.HEADING)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_NAME: str = "BasePage"

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        config: Optional[UIConfig] = None,
        actions: Optional[ElementActions] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the site (defaults to ``ui.base_url``)
            config: Run settings; resolved from config/env when omitted
            actions: Pre-built toolkit (tests inject one with a fake clock)
        """
        self.page = page
        self.config = config or UIConfig.from_loader()
        self.base_url = (base_url or self.config.base_url).rstrip("/")
        self.actions = actions or ElementActions(
            page,
            page_name=self.PAGE_NAME,
            timeout=self.config.explicit_wait,
            poll_interval=self.config.poll_interval,
        )
        logger.debug(f"[{self.PAGE_NAME}] Page object initialized")

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, wait_for: str = "load") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        self.navigate_to(self.URL_PATH, wait_for=wait_for)

    def navigate_to(self, path: str, wait_for: str = "load") -> None:
        """Navigate to a path (or absolute URL) on the site."""
        full_url = path if path.startswith("http") else f"{self.base_url}{path}"
        logger.info(f"[{self.PAGE_NAME}] ACTION: Navigating to '{full_url}'")
        with allure.step(f"Navigate to {full_url}"):
            self.page.goto(full_url, wait_until=wait_for)
        logger.info(f"[{self.PAGE_NAME}] SUCCESS: Navigated to '{full_url}'")

    def wait_for_page_load(self, timeout: Optional[float] = None) -> None:
        self.actions.wait_for_page_load(timeout)

    def get_page_title(self) -> str:
        title = self.actions.page_title()
        logger.debug(f"[{self.PAGE_NAME}] Page title: '{title}'")
        return title

    def get_current_url(self) -> str:
        return self.actions.current_url()

    # =========================================================================
    # Element helpers
    # =========================================================================

    def collect_titles(self, chain: SmartLocator) -> List[TitleEntry]:
        """
        Titles (with their elements) from the first productive source.

        Empty titles are dropped; order follows the document and duplicates
        are kept.
        """
        return chain.first_non_empty(self._entries_from)

    def _entries_from(self, source: TitleSource) -> List[TitleEntry]:
        entries: List[TitleEntry] = []
        containers = self.actions.find_all(source.container)
        logger.debug(f"[{self.PAGE_NAME}] Found {len(containers)} entries for {source}")

        for position, container in enumerate(containers, start=1):
            element = container
            if source.item is not None:
                element = self.actions.find_in(container, source.item)
                if element is None:
                    logger.debug(f"[{self.PAGE_NAME}] Entry {position}: no title element")
                    continue
            title = self.actions.text_of(element)
            if title:
                logger.debug(f"[{self.PAGE_NAME}] Entry {position}: '{title}'")
                entries.append((title, element))
        return entries

    def click_by_title(self, chain: SmartLocator, title: str, item_kind: str = "item") -> None:
        """
        Click the entry whose title matches ``title``.

        Precedence: exact (case-insensitive) title, then the first title
        containing the text, then any link on the page containing it.

        Raises:
            NotFound: If all three strategies come up empty
        """
        logger.info(f"[{self.PAGE_NAME}] Looking for {item_kind}: '{title}'")
        entries = self.collect_titles(chain)
        seen = [text for text, _ in entries]

        match = find_title_match(seen, title)
        if match is not None:
            logger.info(
                f"[{self.PAGE_NAME}] FOUND ({match.kind.value} match): '{match.title}' "
                f"at position {match.index + 1}"
            )
            link = self.link_for(entries[match.index][1])
            label = f"{item_kind.capitalize()} Link: {match.title}"
            self.actions.scroll_into_view(link, label)
            self.actions.click(
                link, label, relocate=self.relocate_link(chain, match.title, match.index)
            )
            return

        fallback = link_text_locator(title)
        logger.debug(f"[{self.PAGE_NAME}] '{title}' not among titles, trying {fallback}")
        if self.actions.is_displayed(fallback):
            self.actions.click(fallback)
            logger.info(f"[{self.PAGE_NAME}] SUCCESS: Clicked on {item_kind} using fallback: '{title}'")
            return

        logger.error(f"[{self.PAGE_NAME}] FAILED: {item_kind.capitalize()} not found: '{title}'")
        logger.error(f"[{self.PAGE_NAME}] Available titles: {seen}")
        self.actions.capture_debug_info()
        raise NotFound(title, seen)

    def link_for(self, handle: ElementHandle) -> ElementHandle:
        """
        The clickable link for a title element.

        Prefers a link inside the element, then the nearest enclosing link,
        then the element itself.
        """
        for strategy in (LINK_INSIDE, LINK_AROUND):
            link = self.actions.find_in(handle, strategy)
            if link is not None:
                return link
        return handle

    def relocate_link(self, chain: SmartLocator, title: str, position: int) -> Relocator:
        """
        Look up the link of a title entry again after the page re-rendered.

        Prefers the entry at the same position when it still carries
        ``title``, then the first entry with that title.
        """
        def relocate() -> Optional[ElementHandle]:
            entries = self.collect_titles(chain)
            if position < len(entries) and entries[position][0] == title:
                return self.link_for(entries[position][1])
            for text, element in entries:
                if text == title:
                    return self.link_for(element)
            logger.warning(f"[{self.PAGE_NAME}] '{title}' is no longer on the page")
            return None

        return relocate


__all__ = ["BasePage"]
