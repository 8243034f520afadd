"""Core business logic for workshopcal."""

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

__all__ = [
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
]
