"""
Structured logging utility for the E2E suite.

Provides JSON-formatted logging with built-in card number and email masking,
context injection, and step timing so CI logs can be filtered per page action.
"""

import json
import logging
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional
from functools import wraps

# Filters every JSON handler carries, including handlers created later
_HANDLER_FILTERS: List[logging.Filter] = []


def mask_card_number(card_number: str) -> str:
    """
    Mask a payment card number to preserve privacy in logs.

    Format: **** **** **** 4242 (keeps last 4 digits)

    Args:
        card_number: Card number with or without spaces/hyphens

    Returns:
        Masked card number string

    Example:
        >>> mask_card_number("4242 4242 4242 4242")
        "**** **** **** 4242"
        >>> mask_card_number("4242-4242-4242-4242")
        "**** **** **** 4242"
    """
    if not card_number:
        return "unknown"

    digits = re.sub(r"\D", "", str(card_number))

    if len(digits) < 8:
        return "invalid"

    return f"**** **** **** {digits[-4:]}"


def mask_email(email: str) -> str:
    """
    Mask an email address, keeping the first character and the domain.

    Example:
        >>> mask_email("jane.doe@example.com")
        "j***@example.com"
    """
    if not email:
        return "unknown"

    local, sep, domain = str(email).partition("@")
    if not sep or not local or not domain:
        return "invalid"

    return f"{local[0]}***@{domain}"


def _all_handlers() -> Iterator[logging.Handler]:
    loggers = [logging.getLogger()] + [
        candidate
        for candidate in list(logging.Logger.manager.loggerDict.values())
        if isinstance(candidate, logging.Logger)
    ]
    for existing in loggers:
        yield from existing.handlers


def add_handler_filter(log_filter: logging.Filter) -> None:
    """
    Attach a filter to every handler of every logger, now and later.

    A record is written by its own logger's handlers before it propagates,
    so a filter on the root logger alone never sees that output.
    """
    if log_filter not in _HANDLER_FILTERS:
        _HANDLER_FILTERS.append(log_filter)
    for handler in _all_handlers():
        handler.addFilter(log_filter)


def remove_handler_filter(log_filter: logging.Filter) -> None:
    """Undo add_handler_filter."""
    if log_filter in _HANDLER_FILTERS:
        _HANDLER_FILTERS.remove(log_filter)
    for handler in _all_handlers():
        handler.removeFilter(log_filter)


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(message)s"))
    for log_filter in _HANDLER_FILTERS:
        handler.addFilter(log_filter)
    return handler


class StructuredLogger:
    """
    Logger that writes one JSON object per line.

    Every entry carries timestamp, level and message. The operation, context,
    duration_ms and error fields are added only when given.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        if not self.logger.handlers:
            self.logger.addHandler(_json_handler())

    def _to_json(self, level: int, message: str, **fields: Any) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": logging.getLevelName(level),
            "message": message,
        }
        for key in ("operation", "context", "error"):
            if fields.get(key):
                entry[key] = fields[key]
        if fields.get("duration_ms") is not None:
            entry["duration_ms"] = round(fields["duration_ms"], 2)

        return json.dumps(entry, ensure_ascii=False, default=str)

    def _emit(self, level: int, message: str, **fields: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._to_json(level, message, **fields))

    def debug(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self._emit(logging.DEBUG, message, operation=operation, context=context)

    def info(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
    ):
        self._emit(
            logging.INFO, message, operation=operation, context=context, duration_ms=duration_ms
        )

    def warning(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
    ):
        self._emit(logging.WARNING, message, operation=operation, context=context, error=error)

    def error(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
        duration_ms: Optional[float] = None,
    ):
        self._emit(
            logging.ERROR,
            message,
            operation=operation,
            context=context,
            error=error,
            duration_ms=duration_ms,
        )


def _masked_arguments(args: tuple, kwargs: Dict[str, Any]) -> Dict[str, str]:
    """Masked email and card number of the first arguments that carry them."""
    masked: Dict[str, str] = {}
    for value in list(args) + list(kwargs.values()):
        email = getattr(value, "email", None)
        if isinstance(email, str) and "email_masked" not in masked:
            masked["email_masked"] = mask_email(email)
        card_number = getattr(value, "card_number", None)
        if isinstance(card_number, str) and "card_masked" not in masked:
            masked["card_masked"] = mask_card_number(card_number)
    return masked


def log_operation(operation_name: str):
    """
    Decorator to automatically log operation start, duration, and completion.

    Guest and card arguments show up in the context only in masked form.

    Usage:
        @log_operation("fill_guest_details")
        def fill_guest_details(self, guest):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context: Dict[str, Any] = {
                "function": func.__name__,
            }

            if len(args) > 0:
                context["arg_count"] = len(args)
            context.update(_masked_arguments(args, kwargs))

            logger.debug(
                f"Starting {operation_name}", operation=operation_name, context=context
            )

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                duration_ms = (time.time() - start_time) * 1000
                logger.info(
                    f"Completed {operation_name}",
                    operation=operation_name,
                    context=context,
                    duration_ms=duration_ms,
                )
                return result
            except Exception as e:
                duration_ms = (time.time() - start_time) * 1000
                logger.error(
                    f"Failed {operation_name}",
                    operation=operation_name,
                    context=context,
                    error=str(e),
                    duration_ms=duration_ms,
                )
                raise

        return wrapper

    return decorator


def get_logger(name: str) -> StructuredLogger:
    """Structured logger for ``name`` (typically ``__name__``)."""
    return StructuredLogger(name)
