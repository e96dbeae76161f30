"""
================================================================================
Homepage Step Definitions
================================================================================

Steps for landing on the blog and checking the homepage landmarks.

================================================================================
"""

from loguru import logger
from pytest_bdd import given, parsers, then

from pandasuites.ui_testing.pages import HomePage


# ==================== Given Steps ====================

@given(parsers.parse("I am on the {site} homepage"))
def open_homepage(home_page: HomePage, site: str):
    logger.info(f"Navigating to {site} homepage")
    home_page.navigate()
    logger.info(f"Successfully navigated to homepage: {home_page.get_current_url()}")


# ==================== Then Steps ====================

@then("the homepage should be displayed")
def homepage_displayed(home_page: HomePage):
    assert home_page.is_home_page_loaded(), "Homepage should be loaded and displayed"


@then(parsers.parse('the page title should contain "{text}"'))
def page_title_contains(home_page: HomePage, text: str):
    actual = home_page.get_page_title()
    logger.info(f"Actual page title: '{actual}'")
    assert text.lower() in actual.lower(), (
        f"Page title should contain '{text}' but was '{actual}'"
    )


@then("the site header should be visible")
def site_header_visible(home_page: HomePage):
    header = home_page.get_header_title()
    assert header, "Site header should not be empty"
    logger.info(f"Site header is visible: '{header}'")


@then(parsers.parse('the header should display "{text}"'))
def header_displays(home_page: HomePage, text: str):
    actual = home_page.get_header_title()
    assert text.lower() in actual.lower(), (
        f"Header should display '{text}' but was '{actual}'"
    )


@then("I should see recent blog posts")
def recent_posts_listed(home_page: HomePage):
    titles = home_page.get_recent_post_titles()
    assert titles, "There should be at least one recent blog post displayed"
    for title in titles:
        logger.debug(f"Post: {title}")


@then(parsers.parse("there should be at least {count:d} post displayed"))
def minimum_posts_displayed(home_page: HomePage, count: int):
    actual = home_page.get_post_count()
    assert actual >= count, f"Expected at least {count} post(s) but found {actual}"
