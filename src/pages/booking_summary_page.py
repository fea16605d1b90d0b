"""Booking summary page object."""

from src.pages.base_page import BasePage
from src.pages.expectations import Locator


class BookingSummaryPage(BasePage):
    BOOKING_SUCCESSFUL_TEXT = BasePage.by_exact_text("Booking successful")

    def get_booking_successful_text(self) -> Locator:
        return self.BOOKING_SUCCESSFUL_TEXT
