"""
================================================================================
Browser Manager
================================================================================

Browser session lifecycle for UI scenarios.

Features:
    - One Playwright browser + context + page per session
    - Browser kind selection (chromium, chrome, edge, firefox, webkit)
    - Thread-local session registry: one live session per thread, created
      lazily and torn down exactly once per scenario
    - Failure screenshots saved to disk and attached to Allure, together
      with the locator health report

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
import threading
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

import allure
from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from .smart_locator import SmartLocator
from .ui_config import UIConfig


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


class SessionState(str, Enum):
    IDLE = "idle"
    STARTING = "starting"
    READY = "ready"
    TEARING_DOWN = "tearing_down"
    CLOSED = "closed"


class BrowserManager:
    """
    Owns one browser session: Playwright driver, browser, context and page.

    Usage:
        with BrowserManager(UIConfig(browser="firefox")) as manager:
            manager.page.goto("https://automationpanda.com/")
    """

    # Extra launch arguments per Playwright launcher
    DEFAULT_LAUNCH_ARGS: Dict[str, List[str]] = {
        "chromium": [
            "--no-sandbox",
            "--disable-dev-shm-usage",
            "--disable-gpu",
        ],
        "firefox": [],
        "webkit": [],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
    }

    def __init__(self, config: Optional[UIConfig] = None):
        """
        Args:
            config: Session settings; resolved from config/env when omitted
        """
        self.config = config or UIConfig.from_loader()

        self._state = SessionState.IDLE
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def __enter__(self) -> "BrowserManager":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def page(self) -> Page:
        if self._page is None or self._state is not SessionState.READY:
            raise RuntimeError("Browser session not started. Call start() first.")
        return self._page

    def start(self) -> Page:
        """
        Launch the browser and open a page.

        Raises:
            ConfigurationError: If the configured browser kind is unsupported
        """
        # Resolve the target before anything is launched
        launcher_name, channel = self.config.browser_target()

        self._state = SessionState.STARTING
        try:
            self._playwright = sync_playwright().start()
            launcher = getattr(self._playwright, launcher_name)

            launch_options: Dict[str, Any] = {
                "headless": self.config.headless,
                "args": list(self.DEFAULT_LAUNCH_ARGS.get(launcher_name, [])),
            }
            if channel:
                launch_options["channel"] = channel

            self._browser = launcher.launch(**launch_options)
            self._context = self._browser.new_context(
                **self.DEFAULT_CONTEXT_OPTIONS,
                viewport=self.config.viewport,
            )
            self._page = self._context.new_page()
            self._page.set_default_timeout(self.config.implicit_wait * 1000)
        except Exception:
            self.close()
            raise

        self._state = SessionState.READY
        logger.info(
            f"Browser started: {self.config.browser} "
            f"(headless={self.config.headless}, implicit_wait={self.config.implicit_wait:g}s)"
        )
        return self._page

    def screenshot(self, path: Optional[Path] = None) -> bytes:
        """Viewport PNG of the current page (optionally also written to ``path``)."""
        return self.page.screenshot(path=str(path) if path else None, full_page=False)

    def close(self) -> None:
        """Close page, context, browser and driver. Errors are logged, not raised."""
        self._state = SessionState.TEARING_DOWN

        for name, resource in (("context", self._context), ("browser", self._browser)):
            if resource is None:
                continue
            try:
                resource.close()
            except PlaywrightError as e:
                logger.warning(f"Error closing {name}: {e}")

        if self._playwright is not None:
            try:
                self._playwright.stop()
            except PlaywrightError as e:
                logger.warning(f"Error stopping Playwright: {e}")

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        self._state = SessionState.CLOSED
        logger.debug("Browser closed")


class DriverManager:
    """
    Thread-local registry of browser sessions.

    Each thread (pytest-xdist runs one per worker process) sees at most one
    live session. ``get_session`` creates it on first use; ``quit_session``
    always clears it, even when closing fails.

    Usage:
        page = DriverManager.get_session().page
        ...
        DriverManager.quit_session()
    """

    _local = threading.local()

    # Callable building an unstarted session from a UIConfig
    session_factory: Callable[[UIConfig], BrowserManager] = BrowserManager

    def __init__(self) -> None:
        raise TypeError("DriverManager is a class-level registry and cannot be instantiated")

    @classmethod
    def get_session(cls, config: Optional[UIConfig] = None) -> BrowserManager:
        """
        Session of the current thread, created and started on first use.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        session = getattr(cls._local, "session", None)
        if session is None:
            thread_name = threading.current_thread().name
            logger.info(f"Creating new browser session for thread: {thread_name}")
            session = cls.session_factory(config or UIConfig.from_loader())
            session.start()
            cls._local.session = session
        return session

    @classmethod
    def get_page(cls, config: Optional[UIConfig] = None) -> Page:
        return cls.get_session(config).page

    @classmethod
    def has_session(cls) -> bool:
        return getattr(cls._local, "session", None) is not None

    @classmethod
    def capture_screenshot(cls, name: str) -> Optional[Path]:
        """
        Save a viewport PNG and attach it to the Allure report.

        Never raises; returns None when there is no session or capture fails.
        """
        session = getattr(cls._local, "session", None)
        if session is None:
            logger.warning(f"No browser session to capture screenshot: {name}")
            return None

        safe_name = re.sub(r"[^\w.-]+", "_", name).strip("_") or "screenshot"
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{safe_name}_{timestamp}.png"

        try:
            SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
            png = session.screenshot(filepath)
            allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)
        except Exception as e:
            logger.error(f"Failed to capture screenshot '{name}': {e}")
            return None

        logger.info(f"Screenshot captured: {filepath}")
        return filepath

    @classmethod
    def capture_failure(cls, name: str, screenshot: bool = True) -> Optional[Path]:
        """
        Attach failure evidence for a scenario: a screenshot (when enabled)
        and the locator health report.

        Never raises; returns the screenshot path, if one was saved.
        """
        path = cls.capture_screenshot(f"failure_{name}") if screenshot else None

        report = SmartLocator.get_health_report()
        logger.info(f"Locator health for {name}:\n{report}")
        try:
            allure.attach(report, name="Locator health", attachment_type=allure.attachment_type.TEXT)
        except Exception as e:
            logger.error(f"Failed to attach locator health report: {e}")
        return path

    @classmethod
    def quit_session(cls) -> None:
        """Close and forget the current thread's session. Never raises."""
        session = getattr(cls._local, "session", None)
        cls._local.session = None
        if session is None:
            return

        logger.info(f"Closing browser session for thread: {threading.current_thread().name}")
        try:
            session.close()
        except Exception as e:
            logger.error(f"Error while closing browser session: {e}")


@contextmanager
def scenario_session(config: Optional[UIConfig] = None) -> Iterator[BrowserManager]:
    """Acquire the thread's session and release it exactly once on exit."""
    session = DriverManager.get_session(config)
    try:
        yield session
    finally:
        DriverManager.quit_session()


__all__ = [
    "BrowserManager",
    "DriverManager",
    "SessionState",
    "SCREENSHOT_DIR",
    "scenario_session",
]
