"""
Checkout page object: guest details, address autocomplete, deposit and payment.
"""

from selenium.webdriver.common.by import By

from src.domain.test_data import CardDetails, GuestDetails
from src.pages.base_page import BasePage
from src.pages.expectations import Locator
from src.utils.logger import log_operation


class CheckoutPage(BasePage):
    COMPLETE_RESERVATION_TEXT = BasePage.by_exact_text("Complete your reservation")

    FIRST_NAME_INPUT = (By.NAME, "firstName")
    LAST_NAME_INPUT = (By.NAME, "lastName")
    EMAIL_INPUT = (By.NAME, "email")
    PHONE_INPUT = (By.NAME, "phone")
    ADDRESS_INPUT = (By.NAME, "address")
    ADDRESS_SUGGESTION = (By.CSS_SELECTOR, '[role="listbox"] [role="option"]')

    PAY_DEPOSIT_BUTTON = BasePage.by_test_id("btnPayDeposit")
    PAYMENT_CONTAINER = BasePage.by_test_id("paymentContainer")
    PAYMENT_IFRAME = (By.CSS_SELECTOR, '[data-testid="paymentContainer"] iframe')
    CARD_NUMBER_INPUT = (By.NAME, "cardnumber")
    CARD_EXPIRY_INPUT = (By.NAME, "exp-date")
    CARD_CVC_INPUT = (By.NAME, "cvc")
    CARDHOLDER_NAME_INPUT = (By.NAME, "cardholderName")
    PAY_BUTTON = BasePage.by_test_id("btnPay")

    @property
    def complete_reservation_text(self) -> Locator:
        return self.COMPLETE_RESERVATION_TEXT

    def get_pay_deposit_button(self) -> Locator:
        return self.PAY_DEPOSIT_BUTTON

    def get_payment_container(self) -> Locator:
        return self.PAYMENT_CONTAINER

    @log_operation("fill_guest_details")
    def fill_guest_details(self, guest: GuestDetails) -> None:
        self.fill(self.FIRST_NAME_INPUT, guest.first_name)
        self.fill(self.LAST_NAME_INPUT, guest.last_name)
        self.fill(self.EMAIL_INPUT, guest.email)
        self.fill(self.PHONE_INPUT, guest.phone)

    @log_operation("fill_address_and_select")
    def fill_address_and_select(self, address: str) -> None:
        """Type the address query and pick the first autocomplete suggestion."""
        self.fill(self.ADDRESS_INPUT, address)
        self.click(self.ADDRESS_SUGGESTION)

    def click_pay_deposit_button(self) -> None:
        self.click(self.PAY_DEPOSIT_BUTTON)

    @log_operation("fill_payment_form")
    def fill_payment_form(self, card: CardDetails) -> None:
        """
        Fill card fields, entering the payment provider's iframe when present.

        The driver is always switched back to the top-level document.
        """
        frames = self.driver.find_elements(*self.PAYMENT_IFRAME)
        if frames:
            self.driver.switch_to.frame(frames[0])
        try:
            self.fill(self.CARD_NUMBER_INPUT, card.card_number)
            self.fill(self.CARD_EXPIRY_INPUT, card.expiry)
            self.fill(self.CARD_CVC_INPUT, card.cvc)
            self.fill(self.CARDHOLDER_NAME_INPUT, card.cardholder_name)
        finally:
            if frames:
                self.driver.switch_to.default_content()

    def click_pay_button(self) -> None:
        self.click(self.PAY_BUTTON)
