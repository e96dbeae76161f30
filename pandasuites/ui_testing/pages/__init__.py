"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for automationpanda.com.

Each page class encapsulates:
    - Element locators (and fallback chains)
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .home_page import HomePage
from .search_results_page import SearchResultsPage
from .contact_page import ContactPage

__all__ = [
    "HomePage",
    "SearchResultsPage",
    "ContactPage",
]
