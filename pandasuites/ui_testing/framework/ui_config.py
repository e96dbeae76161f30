"""
UI run settings resolved from ``config/config.yaml`` and the environment.

``UIConfig.from_loader()`` reads the ``ui.*`` keys through the shared
ConfigLoader, so ``UI_BROWSER=firefox`` or ``UI_HEADLESS=false`` override the
file defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from pandasuites.common.global_config import ConfigLoader, ConfigurationError


DEFAULT_BASE_URL = "https://automationpanda.com/"

# browser kind -> (Playwright launcher, release channel)
BROWSER_TARGETS: Dict[str, Tuple[str, Optional[str]]] = {
    "chromium": ("chromium", None),
    "chrome": ("chromium", "chrome"),
    "edge": ("chromium", "msedge"),
    "firefox": ("firefox", None),
    "webkit": ("webkit", None),
}


@dataclass(frozen=True)
class UIConfig:
    """
    Settings for one browser session.

    Attributes:
        base_url: Site under test
        browser: One of BROWSER_TARGETS
        headless: Run without a visible window
        implicit_wait: Playwright default action timeout (seconds)
        explicit_wait: Default timeout for page-model waits (seconds)
        poll_interval: Wait engine poll interval (seconds)
        screenshot_on_failure: Capture the viewport when a scenario fails
    """
    base_url: str = DEFAULT_BASE_URL
    browser: str = "chromium"
    headless: bool = True
    implicit_wait: float = 10
    explicit_wait: float = 20
    poll_interval: float = 0.5
    screenshot_on_failure: bool = True
    viewport_width: int = 1920
    viewport_height: int = 1080

    @classmethod
    def from_loader(cls, loader: Optional[ConfigLoader] = None) -> "UIConfig":
        """
        Build settings from the configuration hierarchy.

        Raises:
            ConfigurationError: If a timing value is not a positive number
        """
        loader = loader or ConfigLoader()
        defaults = cls()

        config = cls(
            base_url=str(loader.get("ui.base_url", defaults.base_url)),
            browser=str(loader.get("ui.browser", defaults.browser)).strip().lower(),
            headless=bool(loader.get("ui.headless", defaults.headless)),
            implicit_wait=cls._seconds(loader, "ui.implicit_wait", defaults.implicit_wait),
            explicit_wait=cls._seconds(loader, "ui.explicit_wait", defaults.explicit_wait),
            poll_interval=cls._seconds(loader, "ui.poll_interval", defaults.poll_interval),
            screenshot_on_failure=bool(
                loader.get("ui.screenshot_on_failure", defaults.screenshot_on_failure)
            ),
            viewport_width=int(loader.get("ui.viewport.width", defaults.viewport_width)),
            viewport_height=int(loader.get("ui.viewport.height", defaults.viewport_height)),
        )
        return config

    @staticmethod
    def _seconds(loader: ConfigLoader, key: str, default: float) -> float:
        value = loader.get(key, float(default))
        try:
            seconds = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{key} must be a number, got {value!r}") from e
        if seconds <= 0:
            raise ConfigurationError(f"{key} must be positive, got {seconds}")
        return seconds

    def browser_target(self) -> Tuple[str, Optional[str]]:
        """
        Playwright launcher name and channel for the configured browser.

        Raises:
            ConfigurationError: If the browser kind is not supported
        """
        try:
            return BROWSER_TARGETS[self.browser]
        except KeyError:
            raise ConfigurationError(
                f"Unsupported browser: '{self.browser}'. "
                f"Supported: {', '.join(BROWSER_TARGETS)}"
            ) from None

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}


__all__ = ["UIConfig", "BROWSER_TARGETS", "DEFAULT_BASE_URL"]
