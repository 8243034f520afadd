"""Exception types raised by workshopcal."""

from typing import Optional


class WorkshopCalendarError(Exception):
    """Base class for all workshopcal errors."""


class InvalidConfigurationError(WorkshopCalendarError):
    """Raised when recurrence parameters, templates or settings are malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class InvalidEventError(WorkshopCalendarError):
    """Raised when an event handed to the serializer cannot be exported."""

    def __init__(self, message: str, event_id: Optional[str] = None):
        self.event_id = event_id
        super().__init__(message)


class EventNotFoundError(WorkshopCalendarError, KeyError):
    """Raised when a catalog lookup names an unknown event id."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(event_id)

    def __str__(self) -> str:
        return f"No workshop with id '{self.event_id}'"
