"""
Web-first assertions for page objects.

Each expectation polls the page until the condition holds or its own timeout
budget runs out, then fails with an AssertionError describing the expected
state, so a scenario stops at the first step that never settles.
"""

from typing import Callable, Tuple

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
)
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

Locator = Tuple[str, str]

DEFAULT_EXPECT_TIMEOUT = 5.0
POLL_FREQUENCY = 0.1


def describe(locator: Locator) -> str:
    by, value = locator
    return f"{by}={value!r}"


def _element_enabled(locator: Locator) -> Callable:
    def _predicate(driver):
        element = driver.find_element(*locator)
        if not element.is_enabled():
            return False
        if (element.get_attribute("aria-disabled") or "").lower() == "true":
            return False
        return element

    return _predicate


def _wait_for(driver, condition: Callable, locator: Locator, state: str, timeout: float):
    wait = WebDriverWait(
        driver,
        timeout,
        poll_frequency=POLL_FREQUENCY,
        ignored_exceptions=(NoSuchElementException, StaleElementReferenceException),
    )
    try:
        return wait.until(condition)
    except TimeoutException as exc:
        raise AssertionError(
            f"Expected {describe(locator)} to be {state} within {timeout}s"
        ) from exc


def expect_visible(driver, locator: Locator, timeout: float = DEFAULT_EXPECT_TIMEOUT):
    """Wait until the element is displayed; returns the element."""
    return _wait_for(driver, EC.visibility_of_element_located(locator), locator, "visible", timeout)


def expect_enabled(driver, locator: Locator, timeout: float = DEFAULT_EXPECT_TIMEOUT):
    """Wait until the element is enabled (and not aria-disabled); returns the element."""
    return _wait_for(driver, _element_enabled(locator), locator, "enabled", timeout)


def expect_hidden(driver, locator: Locator, timeout: float = DEFAULT_EXPECT_TIMEOUT) -> None:
    """Wait until the element is gone or not displayed."""
    _wait_for(driver, EC.invisibility_of_element_located(locator), locator, "hidden", timeout)
