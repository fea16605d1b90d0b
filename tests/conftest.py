"""
Shared pytest fixtures for the booking E2E suite.

Browser fixtures are function-scoped so each scenario gets an isolated
session; settings and test data are loaded once per run.
"""

from datetime import datetime, timezone

import pytest

from src.browser.driver import create_driver, quit_driver
from src.config.settings import Settings, remove_logging_redaction, setup_logging_redaction
from src.pages.booking_summary_page import BookingSummaryPage
from src.pages.checkout_page import CheckoutPage
from src.pages.home_page import HomePage
from src.utils.logger import get_logger

logger = get_logger(__name__)


@pytest.fixture(scope="session")
def settings():
    return Settings()


@pytest.fixture(scope="session")
def test_data(settings):
    data = settings.load_test_data()
    redaction = setup_logging_redaction(data)
    yield data
    remove_logging_redaction(redaction)


@pytest.fixture
def driver(settings, request):
    if not settings.is_e2e_enabled():
        pytest.skip("E2E_BASE_URL not set; skipping browser scenario")

    browser = create_driver(settings)
    request.node.browser_driver = browser
    yield browser
    quit_driver(browser)


@pytest.fixture
def home_page(driver, settings):
    return HomePage(driver, settings)


@pytest.fixture
def checkout_page(driver, settings):
    return CheckoutPage(driver, settings)


@pytest.fixture
def booking_summary_page(driver, settings):
    return BookingSummaryPage(driver, settings)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Save a screenshot when a browser scenario fails."""
    outcome = yield
    report = outcome.get_result()
    if report.when != "call" or not report.failed:
        return

    browser = getattr(item, "browser_driver", None)
    if browser is None:
        return

    settings = item.funcargs.get("settings") or Settings()
    settings.artifacts_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    path = settings.artifacts_dir / f"{item.name}-{stamp}.png"
    try:
        browser.save_screenshot(str(path))
        logger.info("Saved failure screenshot", context={"path": str(path)})
    except Exception as e:
        logger.warning("Failed to save failure screenshot", error=str(e))
