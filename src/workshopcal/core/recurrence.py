"""Recurring workshop generation.

Events are a pure function of the recurrence rule, the content templates and
the caller-supplied ``now``; nothing here reads the clock.
"""

import logging
from datetime import datetime, time, timedelta
from typing import Optional, Sequence, Tuple

import pytz

from workshopcal.config.constants import EVENT_ID_FORMAT, TITLE_NUMBER_PLACEHOLDER
from workshopcal.config.settings import WorkshopConfig
from workshopcal.core.event_model import Event, EventDetails, EventTemplate, RecurrenceRule
from workshopcal.core.timezone_utils import ensure_utc
from workshopcal.exceptions.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


def sunday_based_weekday(dt: datetime) -> int:
    """Weekday of ``dt`` with 0=Sunday .. 6=Saturday."""
    return (dt.weekday() + 1) % 7


def next_anchor(rule: RecurrenceRule, now: datetime) -> datetime:
    """Return the first start instant for ``rule`` strictly after ``now``.

    When ``now`` already falls on the anchor weekday the anchor moves a full
    ``interval_days`` forward, even if the anchor time has not passed yet.

    Args:
        rule: The recurrence rule.
        now: Reference instant; naive values are taken as UTC.

    Returns:
        Aware UTC datetime of the first occurrence.
    """
    now_utc = ensure_utc(now)
    days_ahead = (rule.anchor_weekday - sunday_based_weekday(now_utc)) % 7
    if days_ahead == 0:
        days_ahead = rule.interval_days

    anchor_date = now_utc.date() + timedelta(days=days_ahead)
    anchor_time = time(rule.anchor_time.hour, rule.anchor_time.minute)
    return datetime.combine(anchor_date, anchor_time, tzinfo=pytz.utc)


def generate(
    rule: RecurrenceRule,
    templates: Sequence[EventTemplate],
    now: datetime,
    details: Optional[EventDetails] = None,
) -> Tuple[Event, ...]:
    """Generate ``rule.occurrence_count`` events starting after ``now``.

    Templates are reused cyclically when there are fewer templates than
    occurrences. Event ids are derived from the occurrence number only, so
    regenerating with the same rule yields the same ids.

    Args:
        rule: Recurrence parameters.
        templates: Ordered, non-empty sequence of content templates.
        now: Reference instant; naive values are taken as UTC.
        details: Location, capacity and price shared by every event.

    Returns:
        Tuple of events ordered by start time.

    Raises:
        InvalidConfigurationError: If ``templates`` is empty.
    """
    templates = tuple(templates)
    if not templates:
        raise InvalidConfigurationError(
            "At least one event template is required", field="templates"
        )
    details = details or EventDetails()

    anchor = next_anchor(rule, now)
    events = []
    for index in range(rule.occurrence_count):
        template = templates[index % len(templates)]
        number = index + 1
        start_at = anchor + index * rule.interval
        events.append(Event(
            id=EVENT_ID_FORMAT.format(number=number),
            title=template.title.replace(TITLE_NUMBER_PLACEHOLDER, str(number)),
            description=template.description,
            start_at=start_at,
            end_at=start_at + rule.duration,
            location=details.location,
            capacity=details.capacity,
            price_label=details.price_label,
            image_ref=template.image_ref,
        ))

    logger.debug(
        "Generated %d event(s) every %d day(s) from %s",
        len(events), rule.interval_days, anchor.isoformat()
    )
    return tuple(events)


def generate_from_config(config: WorkshopConfig, now: datetime) -> Tuple[Event, ...]:
    """Generate the workshop programme described by ``config``."""
    return generate(config.rule(), config.templates(), now, config.details())
