"""Timezone resolution and time normalization utilities."""

import logging
import re
from datetime import datetime, time
from typing import Optional, Tuple

import pytz
import tzlocal
from dateutil import parser
from dateutil import tz as du_tz

from workshopcal.config.constants import ABBR_TO_TZ

logger = logging.getLogger(__name__)

# Clock readings only: "10:00", "10:00:30", "7pm", "7:30 p.m."
_TIME_OF_DAY = re.compile(r"^\d{1,2}(?::\d{2}){0,2}\s*(?:[ap]\.?m\.?)?$", re.IGNORECASE)


def normalize_time_string(time_str: str) -> str:
    """Handle common human formats like '10:00h' or '10h15' before parsing.

    Args:
        time_str: The time string to normalize.

    Returns:
        A normalized time string that dateutil can parse.
    """
    if not isinstance(time_str, str):
        return str(time_str)

    s = time_str.strip()

    # Convert European "10.00" to "10:00" for dateutil
    if re.match(r"^\d{1,2}\.\d{2}$", s):
        s = s.replace(".", ":")

    # Handle "10:00h", "10h", "10h15", "10h15m" styles
    match = re.match(r"^\s*(\d{1,2})(?:[:\.h]?(\d{2}))?\s*(?:h(?:rs?)?\.?|m)?\s*$", s, re.IGNORECASE)
    if match and ("h" in s.lower() or ":" not in s):
        hour = int(match.group(1))
        minute = match.group(2) or "00"
        return f"{hour:02d}:{minute}"

    return s


def parse_time_of_day(time_str: str) -> time:
    """Parse a configured wall-clock time such as '10:00' or '7:30pm'.

    Dates and weekday names are rejected; dateutil would read them as midnight.

    Raises:
        ValueError: If the string is not a time of day.
    """
    normalized = normalize_time_string(time_str)
    if not _TIME_OF_DAY.match(normalized):
        logger.error("Not a time of day: '%s'", time_str)
        raise ValueError(f"Invalid time of day: '{time_str}'")
    try:
        parsed = parser.parse(normalized)
    except (ValueError, OverflowError) as exc:
        logger.error("Could not parse time of day '%s': %s", time_str, exc)
        raise ValueError(f"Invalid time of day: '{time_str}'") from exc
    return parsed.time()


def resolve_timezone(tz_str: Optional[str]) -> Tuple[object, Optional[str]]:
    """Resolve a timezone string to a timezone object.

    Args:
        tz_str: The timezone string (e.g., "UTC", "Europe/London", "BST", "local").

    Returns:
        Tuple of (timezone_object, warning_message or None).
    """
    tz_str_raw = tz_str or "UTC"
    tz_upper = tz_str_raw.upper()
    warning = None

    if tz_upper == "LOCAL":
        # Host zone (DST aware)
        local_tz_obj = tzlocal.get_localzone()
        tz_name = getattr(local_tz_obj, "key", None) or str(local_tz_obj)
    else:
        tz_name = ABBR_TO_TZ.get(tz_upper, tz_str_raw)

    try:
        local_tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        # Last-ditch attempt with dateutil (may return fixed offset)
        local_tz = du_tz.gettz(tz_name)
        if local_tz is None:
            local_tz = pytz.utc
            warning = (
                f"Couldn't resolve timezone '{tz_str_raw}' - "
                "showing workshop times in UTC."
            )
            logger.warning(warning)

    return local_tz, warning


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime; naive values are taken as UTC."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc)


def is_aware(dt: datetime) -> bool:
    return dt.tzinfo is not None and dt.tzinfo.utcoffset(dt) is not None
