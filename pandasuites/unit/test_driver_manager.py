import threading

import pytest

from pandasuites.ui_testing.framework import browser_manager
from pandasuites.ui_testing.framework.browser_manager import (
    BrowserManager,
    DriverManager,
    SessionState,
    scenario_session,
)
from pandasuites.ui_testing.framework.exceptions import ConfigurationError
from pandasuites.ui_testing.framework.smart_locator import SmartLocator
from pandasuites.ui_testing.framework.ui_config import UIConfig
from pandasuites.unit.fakes import FakePage


class FakeSession:
    instances = []

    def __init__(self, config):
        self.config = config
        self.page = FakePage()
        self.started = 0
        self.closed = 0
        self.fail_close = False
        self.fail_screenshot = False
        FakeSession.instances.append(self)

    def start(self):
        self.started += 1
        return self.page

    def close(self):
        self.closed += 1
        if self.fail_close:
            raise RuntimeError("browser process already gone")

    def screenshot(self, path=None):
        if self.fail_screenshot:
            raise RuntimeError("Target page, context or browser has been closed")
        return b"\x89PNG"


class BrokenSession(FakeSession):
    def start(self):
        raise RuntimeError("Executable doesn't exist")


@pytest.fixture(autouse=True)
def fake_sessions(monkeypatch, tmp_path):
    FakeSession.instances = []
    monkeypatch.setattr(DriverManager, "session_factory", FakeSession)
    monkeypatch.setattr(browser_manager, "SCREENSHOT_DIR", tmp_path / "screenshots")
    yield
    DriverManager.quit_session()


def test_session_is_created_lazily_and_reused(ui_config):
    assert not DriverManager.has_session()

    first = DriverManager.get_session(ui_config)
    second = DriverManager.get_session(ui_config)

    assert first is second
    assert first.started == 1
    assert DriverManager.get_page(ui_config) is first.page


def test_quit_closes_once_and_clears(ui_config):
    session = DriverManager.get_session(ui_config)

    DriverManager.quit_session()
    DriverManager.quit_session()

    assert session.closed == 1
    assert not DriverManager.has_session()


def test_quit_never_raises(ui_config):
    session = DriverManager.get_session(ui_config)
    session.fail_close = True

    DriverManager.quit_session()

    assert not DriverManager.has_session()


def test_failed_start_leaves_no_session(monkeypatch, ui_config):
    monkeypatch.setattr(DriverManager, "session_factory", BrokenSession)

    with pytest.raises(RuntimeError):
        DriverManager.get_session(ui_config)
    assert not DriverManager.has_session()


def test_sessions_are_isolated_per_thread(ui_config):
    main_session = DriverManager.get_session(ui_config)
    seen = {}

    def worker():
        seen["session"] = DriverManager.get_session(ui_config)
        DriverManager.quit_session()

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join()

    assert seen["session"] is not main_session
    assert seen["session"].closed == 1
    assert DriverManager.get_session(ui_config) is main_session


def test_scenario_session_releases_on_failure(ui_config):
    with pytest.raises(AssertionError):
        with scenario_session(ui_config) as session:
            assert False, "step failed"

    assert session.closed == 1
    assert not DriverManager.has_session()


def test_capture_screenshot_sanitizes_name(ui_config, tmp_path):
    DriverManager.get_session(ui_config)

    path = DriverManager.capture_screenshot("failure_test_search[selenium]")

    assert path.parent == tmp_path / "screenshots"
    assert path.name.startswith("failure_test_search_selenium_")
    assert path.suffix == ".png"


def test_capture_screenshot_is_best_effort(ui_config):
    assert DriverManager.capture_screenshot("no_session") is None

    DriverManager.get_session(ui_config).fail_screenshot = True
    assert DriverManager.capture_screenshot("broken") is None


def test_driver_manager_is_not_instantiable():
    with pytest.raises(TypeError):
        DriverManager()


def test_unsupported_browser_fails_before_launch():
    manager = BrowserManager(UIConfig(browser="opera"))

    with pytest.raises(ConfigurationError):
        manager.start()
    assert manager.state is SessionState.IDLE


def test_page_requires_started_session():
    with pytest.raises(RuntimeError, match="not started"):
        BrowserManager(UIConfig()).page


@pytest.fixture
def attachments(monkeypatch):
    attached = {}

    def attach(body, name=None, attachment_type=None, extension=None):
        attached[name] = body

    monkeypatch.setattr(browser_manager.allure, "attach", attach)
    return attached


def test_capture_failure_attaches_screenshot_and_locator_health(ui_config, tmp_path, attachments):
    titles = SmartLocator("Post Titles", ["h2.entry-title", "article h2"])
    titles.first_non_empty(lambda strategy: ["Intro to Selenium"] if strategy == "article h2" else [])
    DriverManager.get_session(ui_config)

    path = DriverManager.capture_failure("test_search[selenium]")

    assert path.parent == tmp_path / "screenshots"
    assert attachments["failure_test_search[selenium]"] == b"\x89PNG"
    assert "[Post Titles]" in attachments["Locator health"]


def test_capture_failure_without_screenshot_still_reports_health(ui_config, attachments):
    DriverManager.get_session(ui_config)

    assert DriverManager.capture_failure("test_home", screenshot=False) is None
    assert list(attachments) == ["Locator health"]
    assert "No maintenance needed" in attachments["Locator health"]


def test_capture_failure_without_session_never_raises(attachments):
    assert DriverManager.capture_failure("test_home") is None
    assert "Locator health" in attachments
