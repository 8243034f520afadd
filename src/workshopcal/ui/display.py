"""Human-facing formatting of generated workshops.

Display strings are rendered in a configurable time zone and are never used
for calendar export; see ``core.ics_builder`` for the serialized form.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from workshopcal.config.constants import (
    ALL_MONTHS_KEY,
    ALL_MONTHS_LABEL,
    DISPLAY_DATE_FORMAT,
    DISPLAY_TIME_FORMAT,
    META_SEPARATOR,
    MONTH_LABEL_FORMAT,
)
from workshopcal.core.event_model import Event
from workshopcal.core.ics_builder import suggested_filename


def to_display_time(dt: datetime, tz) -> datetime:
    """Convert an aware datetime into the display time zone."""
    return dt.astimezone(tz)


def format_event_date(event: Event, tz) -> str:
    """Date label such as 'Sat Oct 24 2026'."""
    return to_display_time(event.start_at, tz).strftime(DISPLAY_DATE_FORMAT)


def format_event_time(event: Event, tz) -> str:
    """Start time label such as '10:00'."""
    return to_display_time(event.start_at, tz).strftime(DISPLAY_TIME_FORMAT)


def format_event_meta(event: Event, tz, include_location: bool = False) -> str:
    """Meta line shown under a workshop title: date • time [• location]."""
    parts = [format_event_date(event, tz), format_event_time(event, tz)]
    if include_location and event.location:
        parts.append(event.location)
    return META_SEPARATOR.join(parts)


def month_key(event: Event, tz) -> str:
    """'YYYY-MM' of the event start in the display time zone."""
    return to_display_time(event.start_at, tz).strftime("%Y-%m")


def month_label(key: str) -> str:
    """Turn a 'YYYY-MM' key into a label such as 'October 2026'."""
    return datetime.strptime(key, "%Y-%m").strftime(MONTH_LABEL_FORMAT)


def month_options(events: Iterable[Event], tz) -> List[Tuple[str, str]]:
    """Options for the month filter: 'All months' then each month once, in order."""
    options = [(ALL_MONTHS_KEY, ALL_MONTHS_LABEL)]
    seen = set()
    for event in events:
        key = month_key(event, tz)
        if key not in seen:
            seen.add(key)
            options.append((key, month_label(key)))
    return options


def event_card(event: Event, tz, ics_href: Optional[str] = None) -> Dict[str, object]:
    """View model for a workshop card / calendar list item.

    Args:
        event: The workshop to present.
        tz: Display time zone.
        ics_href: Optional download link (e.g. a data URI) for "Add to calendar".

    Returns:
        Dictionary of display-ready values.
    """
    return {
        "id": event.id,
        "title": event.title,
        "meta": format_event_meta(event, tz),
        "list_meta": format_event_meta(event, tz, include_location=True),
        "excerpt": event.description,
        "image": event.image_ref,
        "capacity": event.capacity,
        "price": event.price_label,
        "ics_filename": suggested_filename(event),
        "ics_href": ics_href,
        "signup_value": event.title,
    }
