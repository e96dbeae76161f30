"""
================================================================================
Search Step Definitions
================================================================================

Steps for searching the blog and checking the results page.

================================================================================
"""

from loguru import logger
from pytest_bdd import parsers, then, when

from pandasuites.ui_testing.pages import HomePage, SearchResultsPage


# ==================== When Steps ====================

@when(parsers.parse('I search for "{keyword}"'))
def search_for(home_page: HomePage, keyword: str):
    home_page.search_for(keyword)


# ==================== Then Steps ====================

@then("search results should be displayed")
def search_results_displayed(search_results_page: SearchResultsPage):
    assert search_results_page.is_search_results_displayed(), (
        "Search results page should be displayed"
    )
    count = search_results_page.get_search_results_count()
    assert count > 0, "There should be at least one search result"


@then(parsers.parse('the results should contain "{keyword}"'))
def results_contain_keyword(search_results_page: SearchResultsPage, keyword: str):
    found = search_results_page.is_keyword_in_results(keyword)
    if not found:
        titles = search_results_page.get_search_result_titles()
        logger.warning(f"Keyword '{keyword}' not found in titles. Available titles: {titles}")
    assert found, f"Search results should contain keyword '{keyword}' in at least one title"


@then("no search results should be found")
def no_search_results(search_results_page: SearchResultsPage):
    no_results = search_results_page.has_no_results()
    if not no_results:
        logger.warning(
            f"Expected no results but found {search_results_page.get_search_results_count()} "
            f"results: {search_results_page.get_search_result_titles()}"
        )
    assert no_results, "Search should return no results for the given query"
