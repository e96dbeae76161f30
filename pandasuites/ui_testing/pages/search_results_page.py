"""
================================================================================
Search Results Page Object
================================================================================

Page object for the blog's search results (``/?s=<keyword>``).

Handles:
    - Results / no-results detection
    - Result titles, excerpts and keyword checks
    - Click by index and by title
    - New searches and pagination

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from ..framework.exceptions import IndexOutOfRange, SearchFailed, UIAutomationError, WaitTimeout
from ..framework.page_base import BasePage
from ..framework.smart_locator import Locator, SmartLocator, TitleSource
from ..framework.text_matching import contains_keyword, is_negative_result_message
from ..framework.wait_engine import WaitCondition


class SearchResultsPage(BasePage):
    """
    Search results for a keyword.

    Usage:
        results = SearchResultsPage(page)
        assert results.is_search_results_displayed()
        results.click_on_result(0)
    """

    URL_PATH = "/?s="
    PAGE_NAME = "SearchResultsPage"

    # Quiet wait for results or the no-results message to render (seconds)
    RESULTS_RENDER_TIMEOUT = 5
    RESULTS_RENDER_POLL = 0.2

    SEARCH_INPUT_TIMEOUT = 10
    SEARCH_INPUT_POLL = 0.3

    # =========================================================================
    # Locators
    # =========================================================================

    RESULTS_CONTAINER = Locator.css("#main, .site-main, main", "Search Results Container")
    SEARCH_PAGE_TITLE = Locator.css(
        ".page-title, .archive-title, h1.entry-title", "Search Page Title"
    )
    RESULT_ARTICLES = Locator.css(
        "article.post, article.type-post, .search-entry", "Search Result Articles"
    )
    RESULT_EXCERPTS = Locator.css(
        "article .entry-summary, article .entry-content, .search-entry .entry-excerpt",
        "Search Result Excerpts",
    )
    NO_RESULTS_MESSAGE = Locator.css(".no-results, .not-found", "No Results Message")
    RESULTS_OR_MESSAGE = Locator.css(
        "article.post, article.type-post, .search-entry, .no-results, .not-found",
        "Results or No Results Message",
    )
    SEARCH_INPUT = Locator.css("input.search-field[name='s']", "Search Input")
    PAGINATION = Locator.css(".pagination, .nav-links, .page-numbers", "Pagination")
    NEXT_PAGE_LINK = Locator.css(".next, .nav-next a, a.next", "Next Page Link")
    PREV_PAGE_LINK = Locator.css(".prev, .nav-previous a, a.prev", "Previous Page Link")

    RESULT_TITLES = SmartLocator("Search Result Titles", [
        TitleSource(Locator.css(
            "article .entry-title, .search-entry .entry-title", "Search Result Titles"
        )),
        TitleSource(RESULT_ARTICLES, Locator.css(".entry-title", "Entry Title")),
    ])

    # =========================================================================
    # Page state
    # =========================================================================

    @allure.step("Verify search results are displayed")
    def is_search_results_displayed(self) -> bool:
        """
        True when the results area is visible and shows either results or a
        no-results message.
        """
        logger.info(f"[{self.PAGE_NAME}] Checking if search results are displayed...")
        self.wait_for_page_load()

        current_url = self.get_current_url()
        is_search_page = "?s=" in current_url or "search" in current_url

        container_present = self.actions.is_displayed(
            self.RESULTS_CONTAINER, timeout=self.RESULTS_RENDER_TIMEOUT
        )
        self.actions.waits.satisfied_within(
            self.RESULTS_OR_MESSAGE,
            WaitCondition.VISIBLE,
            timeout=self.RESULTS_RENDER_TIMEOUT,
            poll_interval=self.RESULTS_RENDER_POLL,
        )
        has_results = self.get_search_results_count() > 0
        has_message = self._no_results_message_shown()

        displayed = container_present and (has_results or has_message)
        logger.info(
            f"[{self.PAGE_NAME}] VERIFICATION RESULT: {'PASS' if displayed else 'FAIL'} "
            f"| isSearchPage: {is_search_page} | containerPresent: {container_present} "
            f"| hasResults: {has_results} | hasNoResultsMessage: {has_message}"
        )
        if not displayed:
            self.actions.capture_debug_info()
        return displayed

    def get_search_results_count(self) -> int:
        count = len(self.actions.find_all(self.RESULT_ARTICLES))
        logger.info(f"[{self.PAGE_NAME}] Found {count} search results")
        return count

    def get_search_page_title(self) -> str:
        """Heading of the results page, or an empty string if none renders."""
        try:
            title = self.actions.read_text(self.SEARCH_PAGE_TITLE)
        except WaitTimeout as e:
            logger.warning(f"[{self.PAGE_NAME}] Could not get search page title: {e}")
            return ""
        logger.info(f"[{self.PAGE_NAME}] Search page title: '{title}'")
        return title

    def has_no_results(self) -> bool:
        """
        True when a no-results message is shown, or no result is rendered.

        The count check covers themes that render zero results without any
        message.
        """
        logger.info(f"[{self.PAGE_NAME}] Checking if search returned no results...")
        self.wait_for_page_load()

        if self._no_results_message_shown():
            return True

        count = self.get_search_results_count()
        logger.info(f"[{self.PAGE_NAME}] No results status: {count == 0} (count: {count})")
        return count == 0

    def _no_results_message_shown(self) -> bool:
        message = self.actions.find_all(self.NO_RESULTS_MESSAGE)
        if not message or not self.actions.is_displayed(message[0], self.NO_RESULTS_MESSAGE.name):
            return False
        text = self.actions.text_of(message[0])
        if is_negative_result_message(text):
            logger.info(f"[{self.PAGE_NAME}] No results message found: '{text}'")
            return True
        return False

    # =========================================================================
    # Titles
    # =========================================================================

    def get_search_result_titles(self) -> List[str]:
        """Non-empty result titles in document order."""
        logger.info(f"[{self.PAGE_NAME}] Getting search result titles...")
        self.wait_for_page_load()
        titles = [title for title, _ in self.collect_titles(self.RESULT_TITLES)]
        logger.info(f"[{self.PAGE_NAME}] Found {len(titles)} search result titles: {titles}")
        return titles

    def get_search_result_excerpts(self) -> List[str]:
        excerpts: List[str] = []
        for element in self.actions.find_all(self.RESULT_EXCERPTS):
            excerpt = self.actions.text_of(element)
            if excerpt:
                excerpts.append(excerpt)
        logger.info(f"[{self.PAGE_NAME}] Found {len(excerpts)} search result excerpts")
        return excerpts

    def is_keyword_in_results(self, keyword: str) -> bool:
        """True when any result title contains ``keyword`` (case-insensitive)."""
        titles = self.get_search_result_titles()
        found = contains_keyword(titles, keyword)
        if found:
            logger.info(f"[{self.PAGE_NAME}] FOUND: Keyword '{keyword}' in result titles")
        else:
            logger.info(f"[{self.PAGE_NAME}] NOT FOUND: Keyword '{keyword}' not in any result titles")
        return found

    # =========================================================================
    # Clicking results
    # =========================================================================

    @allure.step("Click on search result #{index}")
    def click_on_result(self, index: int) -> None:
        """
        Open the result at 0-based ``index``.

        Raises:
            IndexOutOfRange: If ``index`` is negative or not below the count
        """
        logger.info(f"[{self.PAGE_NAME}] Clicking on search result at index: {index}")
        self.wait_for_page_load()
        entries = self.collect_titles(self.RESULT_TITLES)

        if index < 0 or index >= len(entries):
            error = IndexOutOfRange(index, len(entries))
            logger.error(f"[{self.PAGE_NAME}] {error}")
            self.actions.capture_debug_info()
            raise error

        title, element = entries[index]
        link = self.link_for(element)
        label = f"Search Result Link: {title}"
        self.actions.scroll_into_view(link, label)
        self.actions.click(link, label, relocate=self.relocate_link(self.RESULT_TITLES, title, index))
        logger.info(f"[{self.PAGE_NAME}] SUCCESS: Clicked on result '{title}' at index {index}")

    @allure.step("Click on search result: {title}")
    def click_on_result_by_title(self, title: str) -> None:
        """
        Open a result by its title (exact, then substring, then any link).

        Raises:
            NotFound: If no strategy finds the result
        """
        self.wait_for_page_load()
        self.click_by_title(self.RESULT_TITLES, title, item_kind="search result")

    # =========================================================================
    # Searching again / pagination
    # =========================================================================

    def search_again(self, keyword: str) -> None:
        """
        Run a new search from the results page.

        Raises:
            SearchFailed: If the search box cannot be found or used
        """
        logger.info(f"[{self.PAGE_NAME}] Performing new search for: '{keyword}'")
        with allure.step(f"Search again for '{keyword}'"):
            try:
                self.actions.waits.clickable(
                    self.SEARCH_INPUT,
                    timeout=self.SEARCH_INPUT_TIMEOUT,
                    poll_interval=self.SEARCH_INPUT_POLL,
                    description=self.SEARCH_INPUT.description,
                )
                self.actions.type_text(self.SEARCH_INPUT, keyword)
                self.actions.press_key(self.SEARCH_INPUT, "Enter")
            except (UIAutomationError, PlaywrightError) as e:
                logger.error(f"[{self.PAGE_NAME}] FAILED: Error performing new search: {e}")
                self.actions.capture_debug_info()
                raise SearchFailed(keyword, str(e)) from e
        logger.info(f"[{self.PAGE_NAME}] SUCCESS: New search submitted for: '{keyword}'")

    def has_pagination(self) -> bool:
        return self.actions.is_displayed(self.PAGINATION)

    def go_to_next_page(self) -> bool:
        """Follow the next-page link. False when there is none or it fails."""
        return self._follow_page_link(self.NEXT_PAGE_LINK, "next")

    def go_to_previous_page(self) -> bool:
        """Follow the previous-page link. False when there is none or it fails."""
        return self._follow_page_link(self.PREV_PAGE_LINK, "previous")

    def _follow_page_link(self, link: Locator, direction: str) -> bool:
        logger.info(f"[{self.PAGE_NAME}] Attempting to go to {direction} page...")
        if not self.actions.is_displayed(link):
            logger.info(f"[{self.PAGE_NAME}] {direction.capitalize()} page link not available")
            return False
        try:
            self.actions.click(link)
        except UIAutomationError as e:
            logger.error(f"[{self.PAGE_NAME}] Error navigating to {direction} page: {e}")
            return False
        self.wait_for_page_load()
        logger.info(
            f"[{self.PAGE_NAME}] SUCCESS: Navigated to {direction} page | URL: {self.get_current_url()}"
        )
        return True


__all__ = ["SearchResultsPage"]
