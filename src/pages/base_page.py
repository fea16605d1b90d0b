"""
Base page object.

Holds the WebDriver session and settings, and provides locator builders and
the wait-then-act primitives every page uses.
"""

import time
from typing import Optional

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from src.config.settings import Settings
from src.pages import expectations
from src.pages.expectations import Locator, POLL_FREQUENCY, describe
from src.utils.logger import get_logger

logger = get_logger(__name__)


class PageActionError(Exception):
    """Raised when a page interaction cannot be performed (target never actionable)."""

    pass


def xpath_literal(text: str) -> str:
    """Quote text for use inside an XPath expression."""
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = text.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def css_attr_value(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


class BasePage:
    """Common behaviour for all page objects."""

    def __init__(self, driver, settings: Settings):
        self.driver = driver
        self.settings = settings

    @staticmethod
    def by_test_id(test_id: str) -> Locator:
        return (By.CSS_SELECTOR, f'[data-testid="{css_attr_value(test_id)}"]')

    @staticmethod
    def by_exact_text(text: str) -> Locator:
        return (By.XPATH, f"//*[normalize-space(text())={xpath_literal(text)}]")

    @staticmethod
    def by_aria_label(label: str) -> Locator:
        return (By.CSS_SELECTOR, f'[aria-label="{css_attr_value(label)}"]')

    def open(self, url: str) -> None:
        logger.info("Navigating", operation="open", context={"url": url})
        self.driver.get(url)

    def wait_actionable(self, locator: Locator, timeout: Optional[float] = None):
        """
        Wait until the element is visible and enabled.

        Raises:
            PageActionError: If the element does not become clickable in time
        """
        timeout = self.settings.expect_timeout if timeout is None else timeout
        try:
            return WebDriverWait(self.driver, timeout, poll_frequency=POLL_FREQUENCY).until(
                EC.element_to_be_clickable(locator)
            )
        except TimeoutException as exc:
            raise PageActionError(
                f"{describe(locator)} was not clickable within {timeout}s"
            ) from exc

    def click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        self.wait_actionable(locator, timeout).click()

    def fill(self, locator: Locator, value: str, timeout: Optional[float] = None) -> None:
        element = self.wait_actionable(locator, timeout)
        element.clear()
        element.send_keys(value)

    def is_present(self, locator: Locator) -> bool:
        return len(self.driver.find_elements(*locator)) > 0

    def wait_for_timeout(self, seconds: float) -> None:
        """Fixed pause, for UIs that keep re-rendering after they become visible."""
        time.sleep(seconds)

    def expect_visible(self, locator: Locator, timeout: Optional[float] = None):
        timeout = self.settings.expect_timeout if timeout is None else timeout
        return expectations.expect_visible(self.driver, locator, timeout)

    def expect_enabled(self, locator: Locator, timeout: Optional[float] = None):
        timeout = self.settings.expect_timeout if timeout is None else timeout
        return expectations.expect_enabled(self.driver, locator, timeout)

    def expect_hidden(self, locator: Locator, timeout: Optional[float] = None) -> None:
        timeout = self.settings.expect_timeout if timeout is None else timeout
        expectations.expect_hidden(self.driver, locator, timeout)
