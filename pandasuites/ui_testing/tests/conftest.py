"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for the BDD scenarios, providing fixtures for
browser sessions, page objects, and scenario setup/teardown.

Key Features:
- One browser session per scenario (thread-local, released exactly once)
- Page Object fixtures for all pages
- Screenshot capture on failure
- Scenario lifecycle banners in the log and Allure labels

================================================================================
"""

from typing import Generator

import allure
import pytest
from loguru import logger
from playwright.sync_api import Page

from pandasuites.ui_testing.framework.browser_manager import DriverManager, scenario_session
from pandasuites.ui_testing.framework.ui_config import UIConfig
from pandasuites.ui_testing.pages import ContactPage, HomePage, SearchResultsPage


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_config() -> UIConfig:
    """Run settings resolved once per worker from config.yaml and the environment."""
    config = UIConfig.from_loader()
    logger.info(
        f"UI run settings | base_url: {config.base_url} | browser: {config.browser} "
        f"| headless: {config.headless}"
    )
    return config


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="function")
def page(request: pytest.FixtureRequest, ui_config: UIConfig) -> Generator[Page, None, None]:
    """
    Function-scoped page fixture.

    Starts the scenario's browser session on first use and always releases it,
    attaching a failure screenshot and the locator health report first when
    the scenario failed.
    """
    scenario_name = request.node.name

    with scenario_session(ui_config) as session:
        logger.info(f"Browser session ready for scenario: {scenario_name}")
        try:
            yield session.page
        finally:
            report = getattr(request.node, "rep_call", None)
            failed = report is not None and report.failed
            status = "FAILED" if failed else "PASSED" if report is not None else "NOT RUN"

            logger.info("----------------------------------------")
            logger.info(f"Finishing Scenario: {scenario_name}")
            logger.info(f"Status: {status}")
            logger.info("----------------------------------------")

            if failed:
                logger.info(f"Capturing failure details for scenario: {scenario_name}")
                DriverManager.capture_failure(scenario_name, screenshot=ui_config.screenshot_on_failure)

    logger.info(f"Scenario teardown completed: {scenario_name}")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def home_page(page: Page, ui_config: UIConfig) -> HomePage:
    """Provides HomePage instance."""
    return HomePage(page, config=ui_config)


@pytest.fixture
def search_results_page(page: Page, ui_config: UIConfig) -> SearchResultsPage:
    """Provides SearchResultsPage instance."""
    return SearchResultsPage(page, config=ui_config)


@pytest.fixture
def contact_page(page: Page, ui_config: UIConfig) -> ContactPage:
    """Provides ContactPage instance."""
    return ContactPage(page, config=ui_config)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

def pytest_bdd_before_scenario(request, feature, scenario):
    """Log the scenario banner and label the Allure result."""
    tags = sorted(set(feature.tags) | set(scenario.tags))

    logger.info("========================================")
    logger.info(f"Starting Scenario: {scenario.name}")
    logger.info(f"Tags: {['@' + tag for tag in tags]}")
    logger.info("========================================")

    allure.dynamic.feature(feature.name)
    allure.dynamic.story(scenario.name)
    for tag in tags:
        allure.dynamic.tag(tag)


def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    logger.error(f"Step failed: '{step.keyword} {step.name}' | {type(exception).__name__}: {exception}")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Keep each phase's report on the item.

    The ``page`` fixture reads ``rep_call`` during teardown to decide whether
    to capture a failure screenshot.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
