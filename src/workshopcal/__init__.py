"""
workshopcal - Recurring workshop schedule and calendar export

Generates the weekly workshop programme shown on the website and exports
each workshop as an iCalendar (.ics) attachment.
"""

__version__ = "1.0.0"

# Public API - import commonly used components
from workshopcal.config.settings import DEFAULT_CONFIG, WorkshopConfig, load_config
from workshopcal.exceptions.errors import (
    WorkshopCalendarError,
    InvalidConfigurationError,
    InvalidEventError,
    EventNotFoundError,
)
from workshopcal.core.event_model import (
    AnchorTime,
    Event,
    EventDetails,
    EventTemplate,
    RecurrenceRule,
)
from workshopcal.core.recurrence import generate, generate_from_config, next_anchor
from workshopcal.core.ics_builder import (
    CalendarDownload,
    build_download,
    combine_ics_strings,
    serialize,
    suggested_filename,
    to_data_uri,
)
from workshopcal.ui.catalog import EventCatalog

__all__ = [
    # Version
    "__version__",
    # Config
    "DEFAULT_CONFIG",
    "WorkshopConfig",
    "load_config",
    # Exceptions
    "WorkshopCalendarError",
    "InvalidConfigurationError",
    "InvalidEventError",
    "EventNotFoundError",
    # Core
    "AnchorTime",
    "Event",
    "EventDetails",
    "EventTemplate",
    "RecurrenceRule",
    "generate",
    "generate_from_config",
    "next_anchor",
    "CalendarDownload",
    "build_download",
    "combine_ics_strings",
    "serialize",
    "suggested_filename",
    "to_data_uri",
    # UI
    "EventCatalog",
]
