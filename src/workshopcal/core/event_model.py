"""Data model for workshop templates, recurrence rules and generated events."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict

from dateutil import parser

from workshopcal.config.constants import (
    DEFAULT_CAPACITY,
    DEFAULT_LOCATION,
    DEFAULT_PRICE_LABEL,
    WEEKDAY_NAMES,
)
from workshopcal.core.timezone_utils import ensure_utc, parse_time_of_day
from workshopcal.exceptions.errors import InvalidConfigurationError, InvalidEventError


@dataclass(frozen=True)
class EventTemplate:
    """Content reused for one or more occurrences.

    ``title`` may contain ``{number}``, replaced by the 1-based occurrence
    number when events are generated.
    """

    title: str
    description: str = ""
    image_ref: str = ""


@dataclass(frozen=True)
class AnchorTime:
    """Wall-clock time of day (UTC) at which every occurrence starts."""

    hour: int
    minute: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise InvalidConfigurationError(
                f"Anchor hour must be 0-23, got {self.hour}", field="hour"
            )
        if not 0 <= self.minute <= 59:
            raise InvalidConfigurationError(
                f"Anchor minute must be 0-59, got {self.minute}", field="minute"
            )

    @classmethod
    def parse(cls, value: str) -> "AnchorTime":
        """Build an AnchorTime from 'HH:MM' (or '10.00', '10h', '10h30').

        Raises:
            InvalidConfigurationError: If the value is not a time of day.
        """
        try:
            parsed = parse_time_of_day(value)
        except ValueError as exc:
            raise InvalidConfigurationError(str(exc), field="start_time") from exc
        return cls(hour=parsed.hour, minute=parsed.minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class RecurrenceRule:
    """Weekly-style recurrence anchored on a weekday (0=Sunday) and time."""

    anchor_weekday: int
    anchor_time: AnchorTime
    occurrence_count: int
    interval_days: int = 7
    duration_minutes: int = 120

    def __post_init__(self) -> None:
        if not 0 <= self.anchor_weekday <= 6:
            raise InvalidConfigurationError(
                f"Anchor weekday must be 0-6 (0=Sunday), got {self.anchor_weekday}",
                field="anchor_weekday",
            )
        if self.occurrence_count < 1:
            raise InvalidConfigurationError(
                f"Occurrence count must be at least 1, got {self.occurrence_count}",
                field="occurrence_count",
            )
        if self.interval_days < 1:
            raise InvalidConfigurationError(
                f"Interval must be at least 1 day, got {self.interval_days}",
                field="interval_days",
            )
        if self.duration_minutes < 1:
            raise InvalidConfigurationError(
                f"Duration must be at least 1 minute, got {self.duration_minutes}",
                field="duration_minutes",
            )

    @property
    def weekday_name(self) -> str:
        return WEEKDAY_NAMES[self.anchor_weekday]

    @property
    def interval(self) -> timedelta:
        return timedelta(days=self.interval_days)

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=self.duration_minutes)


@dataclass(frozen=True)
class EventDetails:
    """Venue-level fields copied onto every generated event."""

    location: str = DEFAULT_LOCATION
    capacity: int = DEFAULT_CAPACITY
    price_label: str = DEFAULT_PRICE_LABEL

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise InvalidConfigurationError(
                f"Capacity cannot be negative, got {self.capacity}", field="capacity"
            )


@dataclass(frozen=True)
class Event:
    """A single concrete workshop occurrence with UTC start and end."""

    id: str
    title: str
    description: str
    start_at: datetime
    end_at: datetime
    location: str = DEFAULT_LOCATION
    capacity: int = DEFAULT_CAPACITY
    price_label: str = DEFAULT_PRICE_LABEL
    image_ref: str = ""

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise InvalidEventError(
                f"Event '{self.id}' capacity cannot be negative, got {self.capacity}",
                event_id=self.id,
            )

    @property
    def duration(self) -> timedelta:
        return self.end_at - self.start_at

    @classmethod
    def from_dict(cls, data: Dict) -> "Event":
        """Create an Event from a dictionary produced by ``to_dict``.

        Timestamps may be datetimes or ISO 8601 strings; both are normalized
        to UTC.
        """
        missing = {"id", "title", "start_at", "end_at"} - set(data.keys())
        if missing:
            raise InvalidConfigurationError(
                f"Event data is missing required fields: {', '.join(sorted(missing))}"
            )
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description") or "",
            start_at=_coerce_datetime(data["start_at"]),
            end_at=_coerce_datetime(data["end_at"]),
            location=data.get("location", DEFAULT_LOCATION),
            capacity=int(data.get("capacity", DEFAULT_CAPACITY)),
            price_label=data.get("price_label", DEFAULT_PRICE_LABEL),
            image_ref=data.get("image_ref") or "",
        )

    def to_dict(self) -> Dict:
        """Convert to a JSON-friendly dictionary (ISO 8601 timestamps)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "start_at": self.start_at.isoformat(),
            "end_at": self.end_at.isoformat(),
            "location": self.location,
            "capacity": self.capacity,
            "price_label": self.price_label,
            "image_ref": self.image_ref,
        }


def _coerce_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(parser.isoparse(str(value)))
