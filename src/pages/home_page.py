"""
Home page object: date search, room list and cart.

Calendar day cells are located by their aria label, which the date helpers
render in the widget's exact en-US format.
"""

from datetime import datetime
from typing import Callable, Optional

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait

from src.config.settings import ConfigurationError, Settings
from src.pages.base_page import BasePage, PageActionError, xpath_literal
from src.pages.expectations import Locator, POLL_FREQUENCY
from src.utils.dates import BookingDateRange, booking_date_range, format_for_display
from src.utils.logger import get_logger, log_operation
from src.utils.timezone import now_local

logger = get_logger(__name__)


class CalendarNavigationError(PageActionError):
    """Raised when a day cell is not rendered after paging through the calendar."""

    pass


class HomePage(BasePage):
    CALENDAR_ICON = BasePage.by_test_id("calendarIcon")
    CALENDAR_NEXT_MONTH = BasePage.by_test_id("calendarNextMonth")
    SEARCH_BUTTON = BasePage.by_test_id("btnSearch")
    AVAILABLE_TEXT = BasePage.by_exact_text("Available")
    CART_CONTENT = BasePage.by_test_id("cartContentComponent")
    CHECKOUT_ON_CART = BasePage.by_test_id("btnCheckoutOnCart")

    # A year of months is more than any booking window the site offers
    MAX_CALENDAR_PAGES = 12
    CALENDAR_PAGE_WAIT = 1.0

    def __init__(
        self,
        driver,
        settings: Settings,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        super().__init__(driver, settings)
        self.clock = clock or (lambda: now_local(settings.timezone))

    @property
    def calendar_icon(self) -> Locator:
        return self.CALENDAR_ICON

    @property
    def available_text(self) -> Locator:
        return self.AVAILABLE_TEXT

    @property
    def cart_content(self) -> Locator:
        return self.CART_CONTENT

    @property
    def checkout_on_cart_button(self) -> Locator:
        return self.CHECKOUT_ON_CART

    @staticmethod
    def see_prices_button(room_item_id: str) -> Locator:
        return (
            By.XPATH,
            f"//*[@data-testid={xpath_literal('roomItem-' + room_item_id)}]"
            f"//*[@data-testid='btnSeePrices']",
        )

    @staticmethod
    def add_to_cart_button(room_item_id: str, add_on_name: str) -> Locator:
        """Add-to-cart button of the rate plan that lists ``add_on_name``."""
        return (
            By.XPATH,
            f"//*[@data-testid={xpath_literal('roomItem-' + room_item_id)}]"
            f"//*[@data-testid='ratePlan'][.//*[normalize-space(text())={xpath_literal(add_on_name)}]]"
            f"//*[@data-testid='btnAddToCart']",
        )

    def navigate_to_home_page(self) -> None:
        if not self.settings.base_url:
            raise ConfigurationError("E2E_BASE_URL is not set")
        self.open(self.settings.base_url)

    def click_calendar_icon(self) -> None:
        self.click(self.CALENDAR_ICON)

    @log_operation("perform_booking_search")
    def perform_booking_search(
        self, date_range: Optional[BookingDateRange] = None
    ) -> BookingDateRange:
        """
        Pick check-in and check-out in the open calendar, then search.

        Args:
            date_range: Dates to select (defaults to tomorrow + 7 nights)

        Returns:
            The date range that was selected
        """
        if date_range is None:
            date_range = booking_date_range(now=self.clock())

        logger.info(
            "Selecting booking dates",
            operation="perform_booking_search",
            context={
                "check_in": format_for_display(date_range.check_in),
                "check_out": format_for_display(date_range.check_out),
                "nights": date_range.nights,
            },
        )

        self.select_calendar_day(date_range.check_in_label)
        self.select_calendar_day(date_range.check_out_label)
        self.click(self.SEARCH_BUTTON)
        return date_range

    def select_calendar_day(self, aria_label: str) -> None:
        """
        Click the day cell labelled ``aria_label``, paging forward as needed.

        Raises:
            CalendarNavigationError: If the day is not found within MAX_CALENDAR_PAGES
        """
        locator = self.by_aria_label(aria_label)
        for page in range(self.MAX_CALENDAR_PAGES + 1):
            if self._day_rendered(locator):
                self.click(locator)
                return
            if page < self.MAX_CALENDAR_PAGES:
                logger.debug(
                    "Day not rendered; paging calendar forward",
                    operation="select_calendar_day",
                    context={"aria_label": aria_label, "page": page + 1},
                )
                self.click(self.CALENDAR_NEXT_MONTH)

        raise CalendarNavigationError(
            f"Calendar day {aria_label!r} not found after {self.MAX_CALENDAR_PAGES} months"
        )

    def _day_rendered(self, locator: Locator) -> bool:
        try:
            WebDriverWait(
                self.driver, self.CALENDAR_PAGE_WAIT, poll_frequency=POLL_FREQUENCY
            ).until(lambda d: len(d.find_elements(*locator)) > 0)
            return True
        except TimeoutException:
            return False

    @log_operation("click_see_prices_button")
    def click_see_prices_button(self, room_item_id: str) -> None:
        self.click(self.see_prices_button(room_item_id))

    @log_operation("add_bed_and_breakfast_to_cart")
    def add_bed_and_breakfast_to_cart(self, room_item_id: str, add_on_name: str) -> None:
        self.click(self.add_to_cart_button(room_item_id, add_on_name))

    def click_checkout_on_cart(self) -> None:
        self.click(self.CHECKOUT_ON_CART)
