"""
Chrome WebDriver factory for the E2E suite.

Resolves the Chrome and ChromeDriver binaries from environment hints, known
install paths or PATH, and falls back to Selenium Manager when none is found.
"""

import os
import shutil
from pathlib import Path
from typing import Optional

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service

from src.config.settings import Settings
from src.utils.logger import get_logger

logger = get_logger(__name__)

CHROME_ENV_VARS = ("CHROME_BINARY_PATH", "GOOGLE_CHROME_BIN")
CHROME_KNOWN_PATHS = (
    "/opt/chrome/chrome",
    "/usr/bin/google-chrome",
    "/usr/bin/chromium-browser",
    "/usr/bin/chromium",
)
CHROME_PATH_NAMES = ("google-chrome", "chrome", "chromium-browser", "chromium")

CHROMEDRIVER_ENV_VARS = ("CHROMEDRIVER_BIN", "CHROMEDRIVER_PATH")
CHROMEDRIVER_KNOWN_PATHS = (
    "/opt/chromedriver",
    "/usr/local/bin/chromedriver",
    "/usr/bin/chromedriver",
)


def build_chrome_options(settings: Settings) -> Options:
    """
    Build Chrome options for a desktop booking session.

    The browser language is pinned to en-US so calendar aria labels render in
    the format the date helpers produce.
    """
    chrome_options = Options()
    chrome_binary = resolve_chrome_binary_location()
    if chrome_binary:
        chrome_options.binary_location = chrome_binary
        logger.info("Using Chrome binary", context={"path": chrome_binary})
    else:
        logger.warning("Chrome binary not found via known paths; relying on Selenium defaults")

    if settings.headless:
        chrome_options.add_argument("--headless=new")
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.add_argument("--disable-gpu")
    chrome_options.add_argument("--lang=en-US")
    chrome_options.add_experimental_option("prefs", {"intl.accept_languages": "en-US,en"})

    width, height = settings.window_size
    chrome_options.add_argument(f"--window-size={width},{height}")

    return chrome_options


def create_driver(settings: Settings) -> webdriver.Chrome:
    """
    Start a Chrome session configured from settings.

    Raises:
        WebDriverException: If the browser cannot be started
    """
    chrome_options = build_chrome_options(settings)

    chromedriver_path = resolve_chromedriver_path()
    if chromedriver_path:
        logger.info("Using ChromeDriver binary", context={"path": chromedriver_path})
        service = Service(executable_path=chromedriver_path)
    else:
        logger.warning(
            "ChromeDriver binary not found via known paths; falling back to Selenium Manager"
        )
        service = Service()

    driver = webdriver.Chrome(service=service, options=chrome_options)
    try:
        driver.set_page_load_timeout(settings.page_load_timeout)
    except WebDriverException as exc:
        logger.warning(
            "Could not set page load timeout",
            operation="create_driver",
            error=str(exc),
        )

    logger.info(
        "Browser session started",
        operation="create_driver",
        context={"headless": settings.headless, "window_size": list(settings.window_size)},
    )
    return driver


def quit_driver(driver) -> None:
    """Quit the browser session; failures are logged, not raised."""
    if driver is None:
        return
    try:
        driver.quit()
    except WebDriverException as exc:
        logger.warning("Failed to quit browser session", operation="quit_driver", error=str(exc))


def _find_binary(env_vars, known_paths, path_names) -> Optional[str]:
    """First existing file named by an env var or a known path, else a PATH lookup."""
    for candidate in [os.getenv(var) for var in env_vars] + list(known_paths):
        if candidate and Path(candidate).is_file():
            return candidate

    for name in path_names:
        resolved = shutil.which(name)
        if resolved:
            return resolved

    return None


def resolve_chrome_binary_location() -> Optional[str]:
    return _find_binary(CHROME_ENV_VARS, CHROME_KNOWN_PATHS, CHROME_PATH_NAMES)


def resolve_chromedriver_path() -> Optional[str]:
    return _find_binary(CHROMEDRIVER_ENV_VARS, CHROMEDRIVER_KNOWN_PATHS, ("chromedriver",))
