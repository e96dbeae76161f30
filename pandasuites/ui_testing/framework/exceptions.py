"""
Exception hierarchy for the UI framework.

Every error raised by the wait engine, the interaction toolkit and the page
objects derives from ``UIAutomationError`` and keeps its diagnostic fields
as attributes so steps and tests can assert on them directly.
"""

from __future__ import annotations

from typing import Optional, Sequence

from pandasuites.common.global_config import ConfigurationError


class UIAutomationError(Exception):
    """Base class for UI automation failures."""
    pass


class WaitTimeout(UIAutomationError):
    """A wait condition never held within its timeout."""

    def __init__(
        self,
        description: str,
        condition: str,
        timeout: float,
        url: str = "",
        title: str = "",
        last_error: Optional[str] = None,
    ):
        self.description = description
        self.condition = condition
        self.timeout = timeout
        self.url = url
        self.title = title
        self.last_error = last_error
        message = (
            f"TIMEOUT: '{description}' not {condition} within {timeout:g}s "
            f"| URL: {url} | Title: {title}"
        )
        if last_error:
            message += f" | Last error: {last_error}"
        super().__init__(message)


class ActionFailed(UIAutomationError):
    """A resolved element rejected an action (after the single stale retry)."""

    def __init__(self, action: str, description: str, reason: str):
        self.action = action
        self.description = description
        self.reason = reason
        super().__init__(f"FAILED: could not {action} '{description}'. Error: {reason}")


class NotFound(UIAutomationError):
    """No element matched a business-level lookup (e.g. a post title)."""

    def __init__(self, title: str, seen: Sequence[str] = ()):
        self.title = title
        self.seen = list(seen)
        super().__init__(f"Not found: '{title}'. Available titles: {self.seen}")


class IndexOutOfRange(UIAutomationError, IndexError):
    """Index-based lookup outside the rendered items."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(
            f"INDEX OUT OF RANGE: requested index {index}, but only {count} results available"
        )


class SearchFailed(UIAutomationError):
    """The search control could not be located or used."""

    def __init__(self, keyword: str, reason: str):
        self.keyword = keyword
        self.reason = reason
        super().__init__(f"Could not perform search for: '{keyword}'. Error: {reason}")


__all__ = [
    "UIAutomationError",
    "WaitTimeout",
    "ActionFailed",
    "NotFound",
    "IndexOutOfRange",
    "SearchFailed",
    "ConfigurationError",
]
