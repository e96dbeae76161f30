"""
================================================================================
Home Page Object
================================================================================

Page object for the Automation Panda blog homepage.

Handles:
    - Homepage landmarks (site title, main content, navigation, footer)
    - Site search (including a search box hidden behind a toggle)
    - Recent post titles and click-by-title
    - Navigation menu

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from ..framework.exceptions import SearchFailed, UIAutomationError, WaitTimeout
from ..framework.page_base import BasePage
from ..framework.smart_locator import Locator, SmartLocator, TitleSource, link_text_locator


class HomePage(BasePage):
    """
    Automation Panda homepage.

    Usage:
        home = HomePage(page)
        home.navigate()
        assert home.is_home_page_loaded()
        home.search_for("selenium")
    """

    URL_PATH = "/"
    PAGE_NAME = "HomePage"

    # Search control timing (seconds)
    SEARCH_INPUT_TIMEOUT = 15
    SEARCH_INPUT_POLL = 0.3

    # Quiet wait for each landmark after the load event (seconds)
    LANDMARK_TIMEOUT = 5

    # =========================================================================
    # Locators
    # =========================================================================

    SITE_TITLE = Locator.css("h1.site-title", "Site Title")
    SITE_DESCRIPTION = Locator.css("h2.site-description", "Site Description")
    NAV_MENU = Locator.css("nav#site-navigation.main-navigation", "Navigation Menu")
    NAV_MENU_ITEMS = Locator.css("#menu-primary .menu-item a", "Navigation Menu Items")
    SEARCH_TOGGLE = Locator.css(
        ".search-toggle, button[aria-label*='Search'], .search-icon", "Search Toggle"
    )
    SEARCH_INPUT = Locator.css("input.search-field[name='s']", "Search Input Field")
    MAIN_CONTENT = Locator.css("#main, .site-main, main", "Main Content")
    FOOTER = Locator.css("footer.site-footer, #colophon", "Footer")
    ARTICLES = Locator.css("article.post, article.type-post", "Article Entries")

    POST_TITLES = SmartLocator("Recent Post Titles", [
        TitleSource(ARTICLES, Locator.css(".entry-title", "Entry Title")),
        TitleSource(Locator.css("article.post .entry-title", "Post Titles")),
    ])

    # =========================================================================
    # Page state
    # =========================================================================

    @allure.step("Verify homepage is loaded")
    def is_home_page_loaded(self) -> bool:
        """True when the site title and the main content are both visible."""
        logger.info(f"[{self.PAGE_NAME}] Verifying homepage is loaded...")
        self.wait_for_page_load()

        title_present = self.actions.is_displayed(
            self.SITE_TITLE, timeout=self.LANDMARK_TIMEOUT
        )
        content_present = self.actions.is_displayed(
            self.MAIN_CONTENT, timeout=self.LANDMARK_TIMEOUT
        )
        loaded = title_present and content_present

        if loaded:
            logger.info(f"[{self.PAGE_NAME}] VERIFIED: Homepage loaded successfully")
        else:
            logger.warning(
                f"[{self.PAGE_NAME}] VERIFICATION FAILED: Homepage may not be fully loaded "
                f"| Title present: {title_present} | Content present: {content_present}"
            )
            self.actions.capture_debug_info()
        return loaded

    def get_header_title(self) -> str:
        title = self.actions.read_text(self.SITE_TITLE)
        logger.info(f"[{self.PAGE_NAME}] Header title retrieved: '{title}'")
        return title

    def get_site_description(self) -> str:
        """Site tagline, or an empty string when the theme does not show one."""
        try:
            description = self.actions.read_text(self.SITE_DESCRIPTION)
        except WaitTimeout as e:
            logger.warning(f"[{self.PAGE_NAME}] Site description not found: {e}")
            return ""
        logger.info(f"[{self.PAGE_NAME}] Site description retrieved: '{description}'")
        return description

    def is_navigation_menu_displayed(self) -> bool:
        return self.actions.is_displayed(self.NAV_MENU)

    def is_footer_displayed(self) -> bool:
        return self.actions.is_displayed(self.FOOTER)

    # =========================================================================
    # Search
    # =========================================================================

    def click_search_icon(self) -> None:
        """
        Reveal the search box if it is hidden behind a toggle.

        Best-effort: the box may already be visible, and a toggle that cannot
        be clicked is only logged.
        """
        if self.actions.is_displayed(self.SEARCH_INPUT):
            logger.debug(f"[{self.PAGE_NAME}] Search input already visible")
            return
        if not self.actions.is_displayed(self.SEARCH_TOGGLE):
            logger.debug(f"[{self.PAGE_NAME}] No search toggle found")
            return
        try:
            self.actions.click(self.SEARCH_TOGGLE)
        except UIAutomationError as e:
            logger.warning(f"[{self.PAGE_NAME}] Could not click search icon: {e}")

    def search_for(self, keyword: str) -> None:
        """
        Search the blog for ``keyword`` and submit with Enter.

        Raises:
            SearchFailed: If the search box cannot be found or used
        """
        logger.info(f"[{self.PAGE_NAME}] ========== SEARCH OPERATION ==========")
        logger.info(f"[{self.PAGE_NAME}] Searching for keyword: '{keyword}'")

        with allure.step(f"Search for '{keyword}'"):
            self.click_search_icon()
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
                logger.error(f"[{self.PAGE_NAME}] FAILED: Search operation failed for keyword: '{keyword}'")
                self.actions.capture_debug_info()
                raise SearchFailed(keyword, str(e)) from e

        logger.info(f"[{self.PAGE_NAME}] SUCCESS: Search submitted for keyword: '{keyword}'")

    # =========================================================================
    # Posts
    # =========================================================================

    def get_recent_post_titles(self) -> List[str]:
        """Non-empty post titles in document order."""
        logger.info(f"[{self.PAGE_NAME}] Getting recent post titles...")
        self.wait_for_page_load()
        titles = [title for title, _ in self.collect_titles(self.POST_TITLES)]
        logger.info(f"[{self.PAGE_NAME}] Found {len(titles)} recent post titles")
        return titles

    def get_post_count(self) -> int:
        count = len(self.actions.find_all(self.ARTICLES))
        logger.info(f"[{self.PAGE_NAME}] Found {count} posts on homepage")
        return count

    @allure.step("Click on post: {post_title}")
    def click_on_post(self, post_title: str) -> None:
        """
        Open a post by its title.

        Exact title match first, then the first title containing the text,
        then any link on the page containing it.

        Raises:
            NotFound: If no strategy finds the post
        """
        self.click_by_title(self.POST_TITLES, post_title, item_kind="post")

    # =========================================================================
    # Navigation menu
    # =========================================================================

    def get_navigation_menu_items(self) -> List[str]:
        items: List[str] = []
        for element in self.actions.find_all(self.NAV_MENU_ITEMS):
            text = self.actions.text_of(element)
            if text:
                items.append(text)
        logger.info(f"[{self.PAGE_NAME}] Found {len(items)} navigation menu items: {items}")
        return items

    def click_navigation_menu_item(self, menu_item_text: str) -> None:
        self.actions.click(link_text_locator(menu_item_text, scope="//nav//"))
        logger.info(f"[{self.PAGE_NAME}] SUCCESS: Clicked menu item: '{menu_item_text}'")


__all__ = ["HomePage"]
