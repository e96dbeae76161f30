"""
In-memory stand-ins for the Playwright page, element handles and the clock.

Only the calls the framework makes are implemented. Elements are registered
on the page under the engine-prefixed query of a Locator (``css=...``).
"""

from typing import Callable, Dict, List, Optional, Tuple

from playwright.sync_api import Error as PlaywrightError

STALE_MESSAGE = "Element is not attached to the DOM"


def stale_error() -> PlaywrightError:
    return PlaywrightError(STALE_MESSAGE)


class FakeClock:
    """Monotonic clock that only moves when the code under test sleeps."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []
        self._events: List[Tuple[float, Callable[[], None]]] = []

    def __call__(self) -> float:
        return self.now

    def at(self, moment: float, action: Callable[[], None]) -> None:
        """Run ``action`` once the clock reaches ``moment``."""
        self._events.append((moment, action))

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        due = [event for event in self._events if event[0] <= self.now]
        for event in due:
            self._events.remove(event)
            event[1]()


class FakeElement:
    def __init__(
        self,
        text: str = "",
        visible: bool = True,
        enabled: bool = True,
        tag: str = "div",
        attributes: Optional[Dict[str, str]] = None,
        children: Optional[Dict[str, "FakeElement"]] = None,
    ):
        self.text = text
        self.visible = visible
        self.enabled = enabled
        self.tag = tag
        self.attributes = dict(attributes or {})
        self.children = dict(children or {})
        self.stale = False
        # Raised (in order) by the next click / fill / press calls
        self.action_errors: List[Exception] = []

        self.clicks = 0
        self.fills: List[str] = []
        self.pressed: List[str] = []
        self.scrolled = False
        self.scripts: List[str] = []

    def _check(self) -> None:
        if self.stale:
            raise stale_error()

    def _act(self) -> None:
        self._check()
        if self.action_errors:
            raise self.action_errors.pop(0)

    def is_visible(self) -> bool:
        self._check()
        return self.visible

    def is_enabled(self) -> bool:
        self._check()
        return self.enabled

    def inner_text(self) -> str:
        self._check()
        return self.text

    def get_attribute(self, name: str) -> Optional[str]:
        self._check()
        return self.attributes.get(name)

    def evaluate(self, script: str):
        self._check()
        self.scripts.append(script)
        if "tagName" in script:
            return self.tag
        return None

    def query_selector(self, query: str) -> Optional["FakeElement"]:
        self._check()
        return self.children.get(query)

    def scroll_into_view_if_needed(self) -> None:
        self._check()
        self.scrolled = True

    def click(self) -> None:
        self._act()
        self.clicks += 1

    def fill(self, value: str) -> None:
        self._act()
        self.fills.append(value)

    def press(self, key: str) -> None:
        self._act()
        self.pressed.append(key)


class FakePage:
    def __init__(self, url: str = "https://automationpanda.com/", title: str = "Automation Panda"):
        self.url = url
        self._title = title
        self.elements: Dict[str, List[FakeElement]] = {}
        # Raised (in order) by the next queries for a given selector
        self.query_errors: Dict[str, List[Exception]] = {}
        self.load_error: Optional[Exception] = None
        self.load_states: List[Tuple[str, float]] = []
        self.visited: List[str] = []

    def add(self, locator, *elements: FakeElement) -> None:
        key = getattr(locator, "query", locator)
        self.elements.setdefault(key, []).extend(elements)

    def remove(self, locator) -> None:
        self.elements.pop(getattr(locator, "query", locator), None)

    def fail_next(self, locator, *errors: Exception) -> None:
        key = getattr(locator, "query", locator)
        self.query_errors.setdefault(key, []).extend(errors)

    def _raise_pending(self, query: str) -> None:
        pending = self.query_errors.get(query)
        if pending:
            raise pending.pop(0)

    def query_selector(self, query: str) -> Optional[FakeElement]:
        self._raise_pending(query)
        found = self.elements.get(query) or []
        return found[0] if found else None

    def query_selector_all(self, query: str) -> List[FakeElement]:
        self._raise_pending(query)
        return list(self.elements.get(query, []))

    def title(self) -> str:
        return self._title

    def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None) -> None:
        self.load_states.append((state, timeout))
        if self.load_error is not None:
            raise self.load_error

    def goto(self, url: str, wait_until: str = "load") -> None:
        self.visited.append(url)
        self.url = url

    def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        return b"\x89PNG"
