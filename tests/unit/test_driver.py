from unittest.mock import MagicMock, patch

from selenium.common.exceptions import WebDriverException

from src.browser.driver import (
    build_chrome_options,
    create_driver,
    quit_driver,
    resolve_chrome_binary_location,
    resolve_chromedriver_path,
)
from src.config.settings import Settings


@patch("src.browser.driver.resolve_chrome_binary_location", return_value=None)
def test_options_pin_language_and_window(_mock_binary):
    options = build_chrome_options(Settings(env={"E2E_WINDOW_SIZE": "1440,900"}))

    assert "--headless=new" in options.arguments
    assert "--lang=en-US" in options.arguments
    assert "--window-size=1440,900" in options.arguments
    assert options.experimental_options["prefs"]["intl.accept_languages"] == "en-US,en"


@patch("src.browser.driver.resolve_chrome_binary_location", return_value=None)
def test_headed_mode(_mock_binary):
    options = build_chrome_options(Settings(env={"E2E_HEADLESS": "false"}))
    assert not any(arg.startswith("--headless") for arg in options.arguments)


@patch("src.browser.driver.resolve_chrome_binary_location", return_value="/usr/bin/chromium")
def test_binary_location_applied(_mock_binary):
    options = build_chrome_options(Settings(env={}))
    assert options.binary_location == "/usr/bin/chromium"


@patch("src.browser.driver.resolve_chromedriver_path", return_value="/usr/bin/chromedriver")
@patch("src.browser.driver.resolve_chrome_binary_location", return_value=None)
@patch("src.browser.driver.Service")
@patch("src.browser.driver.webdriver.Chrome")
def test_create_driver_uses_resolved_chromedriver(mock_chrome, mock_service, _b, _d):
    driver = MagicMock()
    mock_chrome.return_value = driver

    result = create_driver(Settings(env={"E2E_PAGE_LOAD_TIMEOUT": "30"}))

    assert result is driver
    mock_service.assert_called_once_with(executable_path="/usr/bin/chromedriver")
    driver.set_page_load_timeout.assert_called_once_with(30.0)


@patch("src.browser.driver.resolve_chromedriver_path", return_value=None)
@patch("src.browser.driver.resolve_chrome_binary_location", return_value=None)
@patch("src.browser.driver.Service")
@patch("src.browser.driver.webdriver.Chrome")
def test_create_driver_falls_back_to_selenium_manager(mock_chrome, mock_service, _b, _d):
    driver = MagicMock()
    driver.set_page_load_timeout.side_effect = WebDriverException("unsupported")
    mock_chrome.return_value = driver

    assert create_driver(Settings(env={})) is driver
    mock_service.assert_called_once_with()


def test_quit_driver_swallows_webdriver_errors():
    driver = MagicMock()
    driver.quit.side_effect = WebDriverException("already closed")

    quit_driver(driver)

    driver.quit.assert_called_once()


def test_quit_driver_none_is_noop():
    quit_driver(None)


def test_resolve_chromedriver_prefers_env(tmp_path, monkeypatch):
    binary = tmp_path / "chromedriver"
    binary.write_text("")
    monkeypatch.delenv("CHROMEDRIVER_BIN", raising=False)
    monkeypatch.setenv("CHROMEDRIVER_PATH", str(binary))

    assert resolve_chromedriver_path() == str(binary)


def test_resolve_chrome_binary_prefers_env(tmp_path, monkeypatch):
    binary = tmp_path / "chrome"
    binary.write_text("")
    monkeypatch.setenv("CHROME_BINARY_PATH", str(binary))

    assert resolve_chrome_binary_location() == str(binary)


@patch("src.browser.driver.CHROMEDRIVER_KNOWN_PATHS", ())
@patch("src.browser.driver.shutil.which", return_value="/home/ci/bin/chromedriver")
def test_resolve_chromedriver_falls_back_to_path(mock_which, monkeypatch):
    monkeypatch.delenv("CHROMEDRIVER_BIN", raising=False)
    monkeypatch.delenv("CHROMEDRIVER_PATH", raising=False)

    assert resolve_chromedriver_path() == "/home/ci/bin/chromedriver"
    mock_which.assert_called_once_with("chromedriver")


@patch("src.browser.driver.CHROME_KNOWN_PATHS", ())
@patch("src.browser.driver.shutil.which", return_value=None)
def test_resolve_chrome_binary_none_when_missing(_mock_which, monkeypatch):
    monkeypatch.delenv("CHROME_BINARY_PATH", raising=False)
    monkeypatch.delenv("GOOGLE_CHROME_BIN", raising=False)

    assert resolve_chrome_binary_location() is None
