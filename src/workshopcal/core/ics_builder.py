"""ICS serialization, download helpers and calendar merging."""

import copy
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from urllib.parse import quote

import pytz
from icalendar import Calendar, Event as ICalEvent, vText

from workshopcal.config.constants import (
    CALENDAR_MEDIA_TYPE,
    DATA_URI_PREFIX,
    ICS_CALSCALE,
    ICS_FILE_EXTENSION,
    ICS_METHOD,
    ICS_PRODID,
    ICS_VERSION,
    UID_DOMAIN,
    UID_PREFIX,
    URI_COMPONENT_SAFE,
)
from workshopcal.core.event_model import Event
from workshopcal.core.timezone_utils import ensure_utc, is_aware
from workshopcal.exceptions.errors import InvalidEventError
from workshopcal.utils.filenames import slugify, with_extension

logger = logging.getLogger(__name__)

_ESCAPED_CHAR = re.compile(r"\\([\\;,nN])")


class _EscapedText(vText):
    """TEXT value written with ``escape_text`` instead of icalendar's escaping.

    icalendar turns a literal backslash followed by ``N`` into a line break
    before escaping, which drops the backslash from values like ``C:\\New``.
    """

    def to_ical(self) -> bytes:
        return escape_text(str(self)).encode(self.encoding)


@dataclass(frozen=True)
class CalendarDownload:
    """A serialized event ready to be offered as a file download."""
    filename: str
    media_type: str
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    @property
    def data_uri(self) -> str:
        return to_data_uri(self.text)


def uid_for(event: Event, domain: str = UID_DOMAIN) -> str:
    """Stable calendar UID for ``event``; re-imports update instead of duplicating."""
    return f"{UID_PREFIX}{event.id}@{domain}"


def serialize(
    event: Event,
    stamp: Optional[datetime] = None,
    domain: str = UID_DOMAIN,
) -> str:
    """Serialize one event into a single-VEVENT iCalendar document.

    Args:
        event: The event to export.
        stamp: DTSTAMP value (default: current UTC time).
        domain: Organizational domain appended to the event id to form the UID.

    Returns:
        ICS content string with CRLF line endings.

    Raises:
        InvalidEventError: If the event has naive timestamps or ends before it starts.
    """
    _validate_event(event)

    cal = _create_ics_calendar()
    cal.add_component(_create_ics_event(event, stamp, domain))

    logger.debug("Serialized event %s (%s)", event.id, event.start_at.isoformat())
    return _format_ics_output(cal)


def suggested_filename(event: Event) -> str:
    """Portable download filename derived from the event id and title."""
    return with_extension(slugify(f"{event.id} {event.title}"), ICS_FILE_EXTENSION)


def build_download(
    event: Event,
    stamp: Optional[datetime] = None,
    domain: str = UID_DOMAIN,
) -> CalendarDownload:
    """Serialize ``event`` and bundle it with its filename and media type."""
    return CalendarDownload(
        filename=suggested_filename(event),
        media_type=CALENDAR_MEDIA_TYPE,
        content=serialize(event, stamp=stamp, domain=domain).encode("utf-8"),
    )


def to_data_uri(payload: str) -> str:
    """Encode an ICS payload as a ``data:`` URI usable in a download link.

    Percent-encoding matches JavaScript's ``encodeURIComponent``.
    """
    return DATA_URI_PREFIX + quote(payload, safe=URI_COMPONENT_SAFE)


def escape_text(value: str) -> str:
    """Apply iCalendar TEXT escaping (backslash, semicolon, comma, line feed).

    Backslashes are escaped first so the escapes added afterwards stay intact.
    """
    escaped = value.replace("\\", "\\\\")
    escaped = escaped.replace(";", "\\;").replace(",", "\\,")
    return escaped.replace("\r\n", "\n").replace("\r", "\n").replace("\n", "\\n")


def unescape_text(value: str) -> str:
    """Reverse iCalendar TEXT escaping."""
    def _replace(match):
        char = match.group(1)
        return "\n" if char in "nN" else char

    return _ESCAPED_CHAR.sub(_replace, value)


def _validate_event(event: Event) -> None:
    """Reject events that cannot be expressed as absolute UTC times.

    Raises:
        InvalidEventError: On missing id, naive timestamps or non-positive duration.
    """
    if not event.id:
        raise InvalidEventError("Event id is required to build a UID")
    if not (is_aware(event.start_at) and is_aware(event.end_at)):
        raise InvalidEventError(
            f"Event '{event.id}' must use timezone-aware timestamps",
            event_id=event.id,
        )
    if event.end_at <= event.start_at:
        raise InvalidEventError(
            f"Event '{event.id}' ends at {event.end_at.isoformat()}, "
            f"not after its start {event.start_at.isoformat()}",
            event_id=event.id,
        )


def _create_ics_calendar() -> Calendar:
    """Create a new ICS calendar with standard headers.

    Returns:
        A new Calendar object with required headers.
    """
    cal = Calendar()
    cal.add("PRODID", ICS_PRODID)
    cal.add("VERSION", ICS_VERSION)
    cal.add("CALSCALE", ICS_CALSCALE)
    cal.add("METHOD", ICS_METHOD)
    return cal


def _create_ics_event(event: Event, stamp: Optional[datetime], domain: str) -> ICalEvent:
    """Create an ICS event component.

    Args:
        event: A validated event.
        stamp: DTSTAMP value, or None for the current UTC time.
        domain: UID domain suffix.

    Returns:
        An Event component ready to add to a calendar.
    """
    ve = ICalEvent()

    ve.add("UID", uid_for(event, domain))
    ve.add("DTSTAMP", ensure_utc(stamp) if stamp else datetime.now(pytz.utc))

    # UTC values are written as YYYYMMDDTHHMMSSZ
    ve.add("DTSTART", ensure_utc(event.start_at))
    ve.add("DTEND", ensure_utc(event.end_at))

    ve.add("SUMMARY", _EscapedText(event.title))
    if event.description:
        ve.add("DESCRIPTION", _EscapedText(event.description))
    if event.location:
        ve.add("LOCATION", _EscapedText(event.location))

    return ve


def _format_ics_output(cal: Calendar) -> str:
    """Format calendar to ICS string with proper line endings.

    Args:
        cal: The Calendar object to format.

    Returns:
        ICS content string with CRLF line endings.
    """
    raw_ical = cal.to_ical()
    decoded_ical = raw_ical.decode("utf-8", errors="replace")
    # Ensure CRLF line endings per RFC5545
    crlf_ical = decoded_ical.replace("\r\n", "\n").replace("\n", "\r\n")
    return crlf_ical


def combine_ics_strings(ics_strings: List[str]) -> str:
    """Merge several ICS documents into one calendar.

    Event UIDs are preserved so that importing the merged file updates
    previously imported workshops; repeated UIDs are kept once.

    Args:
        ics_strings: List of ICS content strings to merge.

    Returns:
        A single merged ICS string.

    Raises:
        ValueError: If no valid ICS data is provided.
    """
    if not ics_strings:
        raise ValueError("No ICS data provided to combine.")

    calendars = _parse_ics_strings(ics_strings)
    if not calendars:
        raise ValueError("No parseable ICS data provided.")

    merged_calendar = _create_merged_calendar(calendars)
    _add_components_to_merged(merged_calendar, calendars)

    return _format_ics_output(merged_calendar)


def _parse_ics_strings(ics_strings: List[str]) -> List[Calendar]:
    """Parse ICS strings into Calendar objects.

    Raises:
        ValueError: If parsing fails.
    """
    calendars = []
    for index, raw in enumerate(ics_strings):
        if raw is None:
            continue

        data = raw.encode("utf-8") if isinstance(raw, str) else raw
        try:
            calendars.append(Calendar.from_ical(data))
        except Exception as exc:
            logger.error("Failed to parse ICS payload at index %d: %s", index, exc)
            raise ValueError(
                f"Failed to parse ICS payload at index {index}: {exc}"
            ) from exc

    return calendars


def _create_merged_calendar(calendars: List[Calendar]) -> Calendar:
    """Create a merged calendar with properties from source calendars."""
    merged_calendar = Calendar()

    for calendar in calendars:
        for prop, value in calendar.property_items(recursive=False):
            if prop in ("BEGIN", "END"):
                continue
            if merged_calendar.get(prop) is None:
                merged_calendar.add(prop, value)

    # Ensure mandatory headers exist
    if merged_calendar.get("PRODID") is None:
        merged_calendar.add("PRODID", ICS_PRODID)
    if merged_calendar.get("VERSION") is None:
        merged_calendar.add("VERSION", ICS_VERSION)
    if merged_calendar.get("CALSCALE") is None:
        merged_calendar.add("CALSCALE", ICS_CALSCALE)

    return merged_calendar


def _add_components_to_merged(merged_calendar: Calendar, calendars: List[Calendar]) -> None:
    """Copy components into the merged calendar, skipping repeated TZIDs and UIDs."""
    seen_timezones: set = set()
    seen_uids: set = set()

    for calendar in calendars:
        for component in calendar.subcomponents:
            component_copy = copy.deepcopy(component)

            if component_copy.name == "VTIMEZONE":
                tzid_raw = component_copy.get("TZID")
                tzid = str(tzid_raw) if tzid_raw else f"__anon_tz_{len(seen_timezones)}"
                if tzid in seen_timezones:
                    continue
                seen_timezones.add(tzid)
                merged_calendar.add_component(component_copy)
                continue

            if component_copy.name == "VEVENT":
                uid = str(component_copy.get("UID", ""))
                if uid and uid in seen_uids:
                    logger.debug("Skipping duplicate event %s while merging", uid)
                    continue
                seen_uids.add(uid)
                merged_calendar.add_component(component_copy)
                continue

            merged_calendar.add_component(component_copy)
