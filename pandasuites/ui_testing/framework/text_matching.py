# ================================================================================
# Text Matching Module
# ================================================================================
#
# Pure helpers shared by the page models for comparing rendered text:
#
#   - Title lookup with exact-then-substring precedence (case-insensitive)
#   - Negative-result vocabulary for "no results" messages
#   - Keyword containment over a list of titles
#
# Nothing here touches the browser, so the precedence rules can be tested
# directly.
#
# ================================================================================

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence


# Words that mark a "nothing found" message, matched as whole words
NO_RESULTS_VOCABULARY = ("no", "nothing", "sorry")

_NO_RESULTS_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(word) for word in NO_RESULTS_VOCABULARY) + r")\b",
    re.IGNORECASE,
)


class MatchKind(str, Enum):
    EXACT = "exact"
    PARTIAL = "partial"


@dataclass(frozen=True)
class TitleMatch:
    """
    Result of a title lookup.

    Attributes:
        index: Position of the matched title in document order
        title: The rendered title text
        kind: Whether the match was exact or a substring match
    """
    index: int
    title: str
    kind: MatchKind


def normalize(text: Optional[str]) -> str:
    """Trim and lower-case text for comparisons."""
    return (text or "").strip().lower()


def find_title_match(titles: Sequence[str], query: str) -> Optional[TitleMatch]:
    """
    Find the title best matching ``query``.

    An exact (case-insensitive, trimmed) match anywhere in the list wins over
    any substring match. Among substring matches the first one in document
    order is chosen.

    Example:
        >>> find_title_match(["Intro to Selenium", "Selenium Grid Basics"], "selenium")
        TitleMatch(index=0, title='Intro to Selenium', kind=<MatchKind.PARTIAL: 'partial'>)

    Returns:
        TitleMatch, or None when neither pass finds anything
    """
    wanted = normalize(query)
    if not wanted:
        return None

    for index, title in enumerate(titles):
        if normalize(title) == wanted:
            return TitleMatch(index=index, title=title, kind=MatchKind.EXACT)

    for index, title in enumerate(titles):
        if wanted in normalize(title):
            return TitleMatch(index=index, title=title, kind=MatchKind.PARTIAL)

    return None


def is_negative_result_message(text: Optional[str]) -> bool:
    """True when the message contains one of the no-results words."""
    if not text:
        return False
    return _NO_RESULTS_PATTERN.search(text) is not None


def contains_keyword(titles: Iterable[str], keyword: str) -> bool:
    """True when any title contains ``keyword`` (case-insensitive)."""
    wanted = normalize(keyword)
    if not wanted:
        return False
    return any(wanted in normalize(title) for title in titles)


__all__ = [
    "NO_RESULTS_VOCABULARY",
    "MatchKind",
    "TitleMatch",
    "normalize",
    "find_title_match",
    "is_negative_result_message",
    "contains_keyword",
]
