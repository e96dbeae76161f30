"""
================================================================================
Smart Locator
================================================================================

Locator descriptors and ordered fallback chains:
    - ``Locator``: immutable strategy + selector (+ human name), re-resolved
      on every use and never bound to a specific element
    - ``SmartLocator``: an explicit, ordered list of strategies tried in
      sequence until one yields a non-empty result
    - Usage analytics: which chains needed a fallback (maintenance report)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from loguru import logger


S = TypeVar("S")
R = TypeVar("R")

STRATEGIES = ("css", "xpath", "text")


@dataclass(frozen=True)
class Locator:
    """
    How to find zero-or-more elements in the current document.

    Attributes:
        selector: Selector string in the given strategy's syntax
        name: Human-readable name used in logs and errors
        strategy: One of 'css', 'xpath', 'text'
    """
    selector: str
    name: str = ""
    strategy: str = "css"

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown locator strategy: {self.strategy}")

    @classmethod
    def css(cls, selector: str, name: str = "") -> "Locator":
        return cls(selector=selector, name=name, strategy="css")

    @classmethod
    def xpath(cls, selector: str, name: str = "") -> "Locator":
        return cls(selector=selector, name=name, strategy="xpath")

    @property
    def query(self) -> str:
        """Selector in Playwright's engine-prefixed form (``css=...``)."""
        return f"{self.strategy}={self.selector}"

    @property
    def description(self) -> str:
        if self.name:
            return f"{self.name} ({self.selector})"
        return self.query

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class TitleSource:
    """
    Where to read a list of titles from.

    Attributes:
        container: Repeating element (e.g. one per article)
        item: Title element nested in each container; None reads the
            container's own text
    """
    container: Locator
    item: Optional[Locator] = None

    def __str__(self) -> str:
        if self.item is None:
            return self.container.description
        return f"{self.container.description} > {self.item.description}"


def xpath_literal(value: str) -> str:
    """Quote ``value`` as an XPath 1.0 string literal (handles both quote kinds)."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"


def link_text_locator(text: str, scope: str = "//") -> Locator:
    """Any link under ``scope`` whose text contains ``text`` (case-insensitive)."""
    literal = xpath_literal(text.strip().lower())
    return Locator.xpath(
        f"{scope}a[contains(translate(normalize-space(.), '{_UPPER}', '{_LOWER}'), {literal})]",
        f"Link containing '{text}'",
    )


@dataclass
class LocatorHealth:
    """
    Tracks which strategy of a chain produced the result.

    Attributes:
        element_name: Human-readable chain name
        primary: Description of the first strategy
        used_fallback: Whether a later strategy was needed
        fallback_name: Description of the strategy used (if fallback)
    """
    element_name: str
    primary: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None


class SmartLocator(Generic[S]):
    """
    Ordered fallback chain of locator strategies.

    Each strategy is handed to a resolver; the first strategy whose result
    is non-empty wins. Keeping the list explicit makes the fallback order
    visible in the page object and testable on its own.

    Usage:
        >>> titles = SmartLocator("Post Titles", [primary, secondary])
        >>> titles.first_non_empty(read_titles)
        ['Intro to Selenium', ...]
    """

    # Chains that needed a fallback, across all instances of the run
    _fallback_used: Dict[str, LocatorHealth] = {}

    def __init__(self, element_name: str, strategies: Sequence[S]):
        if not strategies:
            raise ValueError(f"No strategies defined for element: {element_name}")
        self.element_name = element_name
        self.strategies: List[S] = list(strategies)
        self._health_records: List[LocatorHealth] = []

    def first_non_empty(self, resolve: Callable[[S], List[R]]) -> List[R]:
        """
        Resolve strategies in order and return the first non-empty result.

        Args:
            resolve: Callable turning one strategy into a list of results

        Returns:
            Results of the first productive strategy, or an empty list when
            every strategy came back empty
        """
        for position, strategy in enumerate(self.strategies):
            results = resolve(strategy)
            if results:
                self._record(position, strategy)
                return results
            logger.debug(
                f"'{self.element_name}' strategy {position + 1}/{len(self.strategies)} "
                f"yielded nothing: {strategy}"
            )

        logger.debug(f"All {len(self.strategies)} strategies empty for '{self.element_name}'")
        return []

    def _record(self, position: int, strategy: S) -> None:
        health = LocatorHealth(
            element_name=self.element_name,
            primary=str(self.strategies[0]),
            used_fallback=position > 0,
            fallback_name=str(strategy) if position > 0 else None,
        )
        self._health_records.append(health)

        if position > 0:
            logger.warning(f"Element '{self.element_name}' used fallback: {strategy}")
            SmartLocator._fallback_used[self.element_name] = health

    @property
    def health_records(self) -> List[LocatorHealth]:
        return list(self._health_records)

    @classmethod
    def get_health_report(cls) -> str:
        """
        Locator health report for the run.

        Lists the chains whose primary strategy came back empty, i.e. the
        selectors that no longer match the site's markup.
        """
        if not cls._fallback_used:
            return "All elements used primary locators. No maintenance needed."

        report_lines = [
            "Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]

        for element_name, health in cls._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary}",
                f"    Used: {health.fallback_name}",
                "",
            ])

        return "\n".join(report_lines)

    @classmethod
    def reset_health(cls) -> None:
        cls._fallback_used = {}


__all__ = [
    "Locator",
    "LocatorHealth",
    "SmartLocator",
    "TitleSource",
    "link_text_locator",
    "xpath_literal",
]
