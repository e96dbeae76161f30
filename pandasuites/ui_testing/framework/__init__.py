"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based interaction layer used by the page models.

Components:
    - wait_engine: Fixed-interval polling for element conditions
    - element_actions: Wait/act/query toolkit with the stale-element retry
    - smart_locator: Locator descriptors and ordered fallback chains
    - text_matching: Title matching and no-results vocabulary
    - page_base: Base page object for common operations
    - browser_manager: Browser lifecycle and thread-local sessions
    - ui_config: Run settings from config/config.yaml and the environment

Author: Automation Team
License: MIT
================================================================================
"""

from .exceptions import (
    ActionFailed,
    ConfigurationError,
    IndexOutOfRange,
    NotFound,
    SearchFailed,
    UIAutomationError,
    WaitTimeout,
)
from .smart_locator import Locator, SmartLocator
from .wait_engine import WaitCondition, WaitEngine
from .element_actions import ElementActions
from .ui_config import UIConfig
from .browser_manager import BrowserManager, DriverManager, SessionState, scenario_session
from .page_base import BasePage

__all__ = [
    "ActionFailed",
    "ConfigurationError",
    "IndexOutOfRange",
    "NotFound",
    "SearchFailed",
    "UIAutomationError",
    "WaitTimeout",
    "Locator",
    "SmartLocator",
    "WaitCondition",
    "WaitEngine",
    "ElementActions",
    "UIConfig",
    "BrowserManager",
    "DriverManager",
    "SessionState",
    "scenario_session",
    "BasePage",
]
