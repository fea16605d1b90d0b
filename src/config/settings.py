"""
Configuration loader for the hotel booking E2E suite.

Reads runtime settings from environment variables, loads booking fixture
values from YAML validated against a JSON schema, and installs a logging
filter that redacts payment card details.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Mapping, Optional, Tuple

import jsonschema
import yaml

from src.domain.test_data import BookingTestData
from src.utils.logger import add_handler_filter, remove_handler_filter

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_TEST_DATA_FILE = PROJECT_ROOT / "config" / "test_data.yaml"
DEFAULT_TEST_DATA_SCHEMA = Path(__file__).resolve().parent / "test_data.schema.json"

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class SecretRedactionFilter(logging.Filter):
    """
    Logging filter that redacts secret values from log records.
    Replaces secret substrings with ***REDACTED*** to prevent accidental leakage.
    """

    def __init__(self, secrets: Optional[Dict[str, Any]] = None):
        """
        Initialize filter with secrets to redact.

        Args:
            secrets: Dictionary of secrets to redact (values will be masked)
        """
        super().__init__()
        self.secrets = secrets or {}
        self.redacted_values: set[str] = set()
        if self.secrets:
            self._extract_secret_values(self.secrets)

    def _extract_secret_values(self, obj: Any, max_depth: int = 5) -> None:
        """Recursively extract all secret values from nested structures."""
        if max_depth <= 0:
            return

        if isinstance(obj, dict):
            for value in obj.values():
                self._extract_secret_values(value, max_depth - 1)
        elif isinstance(obj, (list, tuple)):
            for item in obj:
                self._extract_secret_values(item, max_depth - 1)
        elif isinstance(obj, str) and obj:
            self.redacted_values.add(obj)
            # Card numbers are typed without separators too
            compact = obj.replace(" ", "").replace("-", "")
            if compact != obj:
                self.redacted_values.add(compact)

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and redact log record."""
        try:
            record.msg = self._redact_string(str(record.msg))
            if record.args:
                if isinstance(record.args, dict):
                    record.args = {k: self._redact_string(str(v)) for k, v in record.args.items()}
                elif isinstance(record.args, (list, tuple)):
                    record.args = tuple(self._redact_string(str(arg)) for arg in record.args)
        except Exception as e:
            logger.warning(f"Error during secret redaction: {e}")
        return True

    def _redact_string(self, text: str) -> str:
        """Redact all secret values from string."""
        # Longest first so a value containing another is fully replaced
        for secret in sorted(self.redacted_values, key=len, reverse=True):
            if secret in text:
                text = text.replace(secret, "***REDACTED***")
        return text


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be one of true/false/1/0/yes/no, got {raw!r}")


def _parse_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {raw!r}")
    return value


def _parse_window_size(raw: str) -> Tuple[int, int]:
    try:
        width, height = (int(part) for part in raw.split(","))
    except ValueError as e:
        raise ConfigurationError(
            f"E2E_WINDOW_SIZE must look like '1280,1024', got {raw!r}"
        ) from e
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"E2E_WINDOW_SIZE must be positive, got {raw!r}")
    return width, height


class Settings:
    """
    Runtime settings for the E2E suite.

    Values come from environment variables (or an injected mapping in tests)
    and are parsed once per instance.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        """
        Initialize settings.

        Args:
            env: Mapping to read variables from (defaults to os.environ)

        Raises:
            ConfigurationError: If a variable cannot be parsed
        """
        env = os.environ if env is None else env

        self.base_url: Optional[str] = env.get("E2E_BASE_URL") or None
        self.headless = _parse_bool("E2E_HEADLESS", env.get("E2E_HEADLESS", "true"))
        self.window_size = _parse_window_size(env.get("E2E_WINDOW_SIZE", "1280,1024"))
        self.page_load_timeout = _parse_float(
            "E2E_PAGE_LOAD_TIMEOUT", env.get("E2E_PAGE_LOAD_TIMEOUT", "45")
        )
        self.expect_timeout = _parse_float(
            "E2E_EXPECT_TIMEOUT", env.get("E2E_EXPECT_TIMEOUT", "5")
        )
        self.confirmation_timeout = _parse_float(
            "E2E_CONFIRMATION_TIMEOUT", env.get("E2E_CONFIRMATION_TIMEOUT", "10")
        )
        self.checkout_settle_seconds = _parse_float(
            "E2E_CHECKOUT_SETTLE_SECONDS", env.get("E2E_CHECKOUT_SETTLE_SECONDS", "5")
        )
        self.timezone: Optional[str] = env.get("E2E_TIMEZONE") or None
        self.test_data_file = Path(env.get("E2E_TEST_DATA_FILE") or DEFAULT_TEST_DATA_FILE)
        card_file = env.get("E2E_CARD_DETAILS_FILE")
        self.card_details_file: Optional[Path] = Path(card_file) if card_file else None
        self.artifacts_dir = Path(env.get("E2E_ARTIFACTS_DIR") or "artifacts")

    def is_e2e_enabled(self) -> bool:
        """E2E scenarios run only against an explicitly configured site."""
        return self.base_url is not None

    def load_test_data(
        self,
        data_path: Optional[Path] = None,
        schema_path: Optional[Path] = None,
    ) -> BookingTestData:
        """
        Load booking fixture values from YAML and validate against schema.

        Args:
            data_path: Path to test_data.yaml (defaults to configured file)
            schema_path: Path to test_data.schema.json

        Returns:
            BookingTestData instance

        Raises:
            FileNotFoundError: If data or schema file not found
            ValueError: If YAML/JSON is malformed or data fails schema validation
        """
        data_path = Path(data_path or self.test_data_file)
        schema_path = Path(schema_path or DEFAULT_TEST_DATA_SCHEMA)

        try:
            with open(schema_path, "r", encoding="utf-8") as f:
                schema = json.load(f)
                logger.debug(f"Loaded test data schema from {schema_path}")
        except FileNotFoundError:
            logger.error(f"Test data schema file not found: {schema_path}")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in test data schema: {e}")
            raise ValueError(f"Invalid JSON in {schema_path}: {e}") from e

        try:
            with open(data_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"Test data file not found: {data_path}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in test data: {e}")
            raise ValueError(f"Invalid YAML in {data_path}: {e}") from e

        if not data:
            raise ValueError(f"Test data file is empty: {data_path}")

        if self.card_details_file:
            data["card_details"] = self._load_card_details_override(self.card_details_file)

        try:
            jsonschema.validate(instance=data, schema=schema)
        except jsonschema.ValidationError as e:
            logger.error(f"Test data failed schema validation: {e.message}")
            raise ValueError(f"Test data validation failed: {e.message}") from e
        except jsonschema.SchemaError as e:
            logger.error(f"Test data schema is invalid: {e.message}")
            raise ValueError(f"Test data schema is invalid: {e.message}") from e

        logger.info(f"Loaded booking test data from {data_path}")
        return BookingTestData.from_dict(data)

    @staticmethod
    def _load_card_details_override(filepath: Path) -> Dict[str, Any]:
        """
        Load card details from a local JSON file kept out of version control.

        Raises:
            ConfigurationError: If file cannot be read or contains invalid JSON
        """
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                content = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Card details file not found: {filepath}. "
                f"Unset E2E_CARD_DETAILS_FILE to use the sandbox card from test data"
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Card details file contains invalid JSON: {e}") from e

        if not isinstance(content, dict):
            raise ConfigurationError(f"Card details file must hold a JSON object: {filepath}")
        logger.info("Using card details override file")
        return content

    @staticmethod
    def setup_redaction_filter(
        logger_instance: logging.Logger, test_data: BookingTestData
    ) -> SecretRedactionFilter:
        """
        Configure logger with a filter redacting card details.

        The filter also goes on every logger handler, present and future,
        because each structured logger writes through its own handler.

        Args:
            logger_instance: Logger instance to configure
            test_data: Loaded test data whose card details must stay out of logs

        Returns:
            The installed filter
        """
        redaction_filter = SecretRedactionFilter(test_data.card_details.sensitive_values())
        logger_instance.addFilter(redaction_filter)
        add_handler_filter(redaction_filter)
        return redaction_filter


# Module-level convenience functions
def get_settings() -> Settings:
    """Get settings from the current environment."""
    return Settings()


def setup_logging_redaction(test_data: BookingTestData) -> SecretRedactionFilter:
    """Setup card-detail redaction for root logger."""
    return Settings.setup_redaction_filter(logging.getLogger(), test_data)


def remove_logging_redaction(redaction_filter: SecretRedactionFilter) -> None:
    """Remove a filter installed by setup_logging_redaction."""
    logging.getLogger().removeFilter(redaction_filter)
    remove_handler_filter(redaction_filter)
