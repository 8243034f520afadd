"""Custom exceptions for workshopcal."""

from workshopcal.exceptions.errors import (
    WorkshopCalendarError,
    InvalidConfigurationError,
    InvalidEventError,
    EventNotFoundError,
)

__all__ = [
    "WorkshopCalendarError",
    "InvalidConfigurationError",
    "InvalidEventError",
    "EventNotFoundError",
]
