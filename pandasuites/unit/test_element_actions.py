import pytest
from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from pandasuites.ui_testing.framework.exceptions import ActionFailed, WaitTimeout
from pandasuites.ui_testing.framework.smart_locator import Locator
from pandasuites.unit.fakes import STALE_MESSAGE, FakeElement, stale_error

SUBMIT = Locator.css("button[type='submit']", "Submit")
SEARCH_INPUT = Locator.css("input.search-field[name='s']", "Search Input")
RESULTS = Locator.css("article.post", "Results")


def test_click_waits_then_clicks_once(fake_page, actions):
    button = FakeElement("Submit", tag="button")
    fake_page.add(SUBMIT, button)

    actions.click(SUBMIT)

    assert button.clicks == 1


def test_click_retries_once_after_stale_element(fake_page, actions):
    button = FakeElement("Submit", tag="button")
    button.action_errors = [stale_error()]
    fake_page.add(SUBMIT, button)

    actions.click(SUBMIT)

    assert button.clicks == 1
    assert button.action_errors == []


def test_second_stale_failure_is_fatal(fake_page, actions):
    button = FakeElement("Submit", tag="button")
    button.action_errors = [stale_error(), stale_error(), stale_error()]
    fake_page.add(SUBMIT, button)

    with pytest.raises(ActionFailed) as exc_info:
        actions.click(SUBMIT)

    assert button.clicks == 0
    # Exactly one retry: the third queued error is never reached
    assert len(button.action_errors) == 1
    assert exc_info.value.action == "click"
    assert "could not click 'Submit (button[type='submit'])'" in str(exc_info.value)


def test_non_stale_action_error_is_not_retried(fake_page, actions):
    button = FakeElement("Submit", tag="button")
    intercepted = PlaywrightError("Element click intercepted: <div class='overlay'> receives pointer events")
    button.action_errors = [intercepted, stale_error()]
    fake_page.add(SUBMIT, button)

    with pytest.raises(ActionFailed) as exc_info:
        actions.click(SUBMIT)

    assert exc_info.value.__cause__ is intercepted
    assert len(button.action_errors) == 1


def test_stale_handle_without_relocator_fails_fast(actions, clock):
    link = FakeElement("Read more", tag="a")
    link.action_errors = [stale_error()]

    with pytest.raises(ActionFailed) as exc_info:
        actions.click(link, "Read more")

    assert clock.now == 0
    assert STALE_MESSAGE in str(exc_info.value)


def test_stale_handle_is_retried_on_relocated_element(actions, clock):
    detached = FakeElement("Read more", tag="a")
    detached.action_errors = [stale_error()]
    fresh = FakeElement("Read more", tag="a")

    actions.click(detached, "Read more", relocate=lambda: fresh)

    assert (detached.clicks, fresh.clicks) == (0, 1)
    assert clock.now == 0


def test_stale_handle_gone_after_relocate_fails_fast(actions, clock):
    detached = FakeElement("Read more", tag="a")
    detached.action_errors = [stale_error()]

    with pytest.raises(ActionFailed):
        actions.click(detached, "Read more", relocate=lambda: None)

    assert clock.now == 0


def test_click_on_hidden_element_times_out(fake_page, actions):
    fake_page.add(SUBMIT, FakeElement("Submit", visible=False))

    with pytest.raises(WaitTimeout):
        actions.click(SUBMIT, timeout=1)


def test_failure_label_falls_back_to_element_description(actions):
    button = FakeElement("Send", tag="button", attributes={"id": "send"})
    button.action_errors = [PlaywrightError("Element is outside of the viewport")]

    with pytest.raises(ActionFailed) as exc_info:
        actions.click(button)

    assert exc_info.value.description == "<button id='send' name='' class=''> text='Send'"


def test_type_text_clears_then_fills(fake_page, actions):
    field = FakeElement(tag="input")
    fake_page.add(SEARCH_INPUT, field)

    actions.type_text(SEARCH_INPUT, "selenium")

    assert field.fills == ["", "selenium"]


def test_type_text_retries_after_stale_element(fake_page, actions):
    field = FakeElement(tag="input")
    field.action_errors = [stale_error()]
    fake_page.add(SEARCH_INPUT, field)

    actions.type_text(SEARCH_INPUT, "selenium")

    assert field.fills == ["", "selenium"]


def test_press_key_defaults_to_enter(fake_page, actions):
    field = FakeElement(tag="input")
    fake_page.add(SEARCH_INPUT, field)

    actions.press_key(SEARCH_INPUT)

    assert field.pressed == ["Enter"]


def test_read_text_is_trimmed(fake_page, actions):
    fake_page.add(SUBMIT, FakeElement("  Contact Me \n"))
    assert actions.read_text(SUBMIT) == "Contact Me"


def test_read_text_returns_text_read_on_retry(fake_page, actions):
    fresh = FakeElement("Contact Me")

    class Rerendered(FakeElement):
        def inner_text(self):
            fake_page.remove(SUBMIT)
            fake_page.add(SUBMIT, fresh)
            raise stale_error()

    fake_page.add(SUBMIT, Rerendered("Contact"))

    assert actions.read_text(SUBMIT) == "Contact Me"


def test_is_displayed_false_for_zero_elements(actions, clock):
    assert actions.is_displayed(SUBMIT) is False
    assert clock.sleeps == []


def test_is_displayed_false_for_missing_target(actions):
    assert actions.is_displayed(None) is False


def test_is_displayed_swallows_driver_errors(fake_page, actions):
    fake_page.fail_next(SUBMIT, PlaywrightError("Target page, context or browser has been closed"))
    assert actions.is_displayed(SUBMIT) is False


def test_is_displayed_with_timeout_polls(fake_page, actions, clock):
    clock.at(1.0, lambda: fake_page.add(SUBMIT, FakeElement("Submit")))

    assert actions.is_displayed(SUBMIT, timeout=5) is True
    assert clock.now == pytest.approx(1.0)


def test_find_all_retries_once_on_stale_document(fake_page, actions):
    fake_page.add(RESULTS, FakeElement("One"), FakeElement("Two"))
    fake_page.fail_next(RESULTS, stale_error())

    assert len(actions.find_all(RESULTS)) == 2


def test_find_all_empty_after_two_stale_failures(fake_page, actions):
    fake_page.add(RESULTS, FakeElement("One"))
    fake_page.fail_next(RESULTS, stale_error(), stale_error())

    assert actions.find_all(RESULTS) == []


def test_handle_queries_tolerate_stale_handles(actions):
    handle = FakeElement("Intro to Selenium", attributes={"class": "entry-title"})
    handle.stale = True

    assert actions.text_of(handle) == ""
    assert actions.attribute_of(handle, "class") is None
    assert actions.find_in(handle, Locator.css("a")) is None


def test_scroll_and_highlight_are_best_effort(actions):
    handle = FakeElement("Intro to Selenium")
    handle.stale = True

    actions.scroll_into_view(handle)
    actions.highlight(handle)
    actions.scroll_into_view(Locator.css(".missing"))


def test_highlight_outlines_element(fake_page, actions):
    title = FakeElement("Intro to Selenium")
    fake_page.add(SUBMIT, title)

    actions.highlight(SUBMIT)

    assert any("border" in script for script in title.scripts)


def test_page_load_timeout_is_logged_not_raised(fake_page, actions):
    fake_page.load_error = PlaywrightTimeoutError("Timeout 20000ms exceeded.")

    actions.wait_for_page_load(timeout=20)

    assert fake_page.load_states == [("load", 20000)]


def test_capture_debug_info_reports_url_and_title(fake_page, actions):
    fake_page.url = "https://automationpanda.com/?s=selenium"

    assert actions.capture_debug_info() == {
        "url": "https://automationpanda.com/?s=selenium",
        "title": "Automation Panda",
    }
