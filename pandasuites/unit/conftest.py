import pytest

from pandasuites.ui_testing.framework.element_actions import ElementActions
from pandasuites.ui_testing.framework.smart_locator import SmartLocator
from pandasuites.ui_testing.framework.ui_config import UIConfig
from pandasuites.ui_testing.framework.wait_engine import WaitEngine
from pandasuites.unit.fakes import FakeClock, FakePage


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def waits(fake_page, clock) -> WaitEngine:
    return WaitEngine(fake_page, timeout=10, poll_interval=0.5, clock=clock, sleep=clock.sleep)


@pytest.fixture
def actions(fake_page, waits) -> ElementActions:
    return ElementActions(fake_page, page_name="TestPage", waits=waits)


@pytest.fixture
def ui_config() -> UIConfig:
    return UIConfig()


@pytest.fixture(autouse=True)
def _clean_locator_health():
    SmartLocator.reset_health()
    yield
    SmartLocator.reset_health()
