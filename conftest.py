"""
================================================================================
Root Pytest Configuration
================================================================================

Repository-level pytest configuration for the whole suite:

  - Registers the step definition modules as plugins
  - Initializes Loguru once per run
  - Registers markers (Gherkin tags become pytest markers)
  - Auto-marks tests by directory (``ui`` / ``unit``)

================================================================================
"""

from __future__ import annotations

from pathlib import Path

import pytest

from pandasuites.common import get_config, init_logger


pytest_plugins = [
    "pandasuites.ui_testing.steps.home_steps",
    "pandasuites.ui_testing.steps.search_steps",
]


def pytest_configure(config):
    """Configure logging and project-wide custom markers."""
    init_logger()

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification scenarios"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression scenarios"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser scenarios against the live blog"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests with fake pages (no browser)"
    )

    # Feature markers (Gherkin tags)
    config.addinivalue_line(
        "markers", "homepage: Homepage scenarios"
    )
    config.addinivalue_line(
        "markers", "search: Blog search scenarios"
    )
    config.addinivalue_line(
        "markers", "contact: Contact form scenarios"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests by the directory they live in."""
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in Path(path).parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Automation Panda UI Test Suite",
        f"Target: {get_config('ui.base_url', 'https://automationpanda.com/')}",
        f"Browser: {get_config('ui.browser', 'chromium')} "
        f"(headless: {get_config('ui.headless', True)})",
        "=" * 60,
        "",
    ]

