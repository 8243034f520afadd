"""Session-scoped store of generated workshops.

A catalog is generated once and handed to every handler that needs to look
events up by id, filter them by month or export them; nothing regenerates
the programme per click.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Iterator, List, Optional, Sequence

from workshopcal.config.constants import ALL_MONTHS_KEY, DEFAULT_SIGNUP_VALUE, UID_DOMAIN
from workshopcal.config.settings import WorkshopConfig
from workshopcal.core.event_model import Event
from workshopcal.core.ics_builder import CalendarDownload, build_download, combine_ics_strings, serialize
from workshopcal.core.recurrence import generate_from_config
from workshopcal.core.timezone_utils import resolve_timezone
from workshopcal.exceptions.errors import EventNotFoundError, InvalidConfigurationError
from workshopcal.ui.display import event_card, month_key, month_options

logger = logging.getLogger(__name__)


class EventCatalog(Mapping):
    """Read-only mapping of event id to Event, in generation order."""

    def __init__(
        self,
        events: Sequence[Event],
        display_timezone: str = "UTC",
        uid_domain: str = UID_DOMAIN,
    ):
        self._events = {}
        for event in events:
            if event.id in self._events:
                raise InvalidConfigurationError(
                    f"Duplicate event id '{event.id}' in catalog", field="id"
                )
            self._events[event.id] = event
        self.display_timezone = display_timezone
        self.uid_domain = uid_domain
        self.tz, self.timezone_warning = resolve_timezone(display_timezone)

    @classmethod
    def from_config(cls, config: WorkshopConfig, now: datetime) -> "EventCatalog":
        """Generate the programme once for this session."""
        events = generate_from_config(config, now)
        logger.info("Prepared %d workshop(s) from %s", len(events), events[0].start_at.date())
        return cls(events, display_timezone=config.timezone, uid_domain=config.uid_domain)

    def __getitem__(self, event_id: str) -> Event:
        try:
            return self._events[event_id]
        except KeyError:
            raise EventNotFoundError(event_id) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> List[Event]:
        return list(self._events.values())

    def month_options(self):
        return month_options(self.events, self.tz)

    def in_month(self, key: str = ALL_MONTHS_KEY) -> List[Event]:
        """Events whose start falls in month ``key`` ('YYYY-MM'), or all of them."""
        if key == ALL_MONTHS_KEY:
            return self.events
        return [event for event in self.events if month_key(event, self.tz) == key]

    def cards(self, key: str = ALL_MONTHS_KEY, with_links: bool = True):
        """Card view models for the events in month ``key``."""
        cards = []
        for event in self.in_month(key):
            href = self.download(event.id).data_uri if with_links else None
            cards.append(event_card(event, self.tz, ics_href=href))
        return cards

    def signup_value(self, event_id: Optional[str]) -> str:
        """Value for the signup form's hidden 'workshop' field."""
        if not event_id:
            return DEFAULT_SIGNUP_VALUE
        return self[event_id].title

    def download(self, event_id: str, stamp: Optional[datetime] = None) -> CalendarDownload:
        return build_download(self[event_id], stamp=stamp, domain=self.uid_domain)

    def export_all(self, stamp: Optional[datetime] = None) -> str:
        """Serialize every event and merge the results into one calendar."""
        payloads = [serialize(event, stamp=stamp, domain=self.uid_domain) for event in self.events]
        return combine_ics_strings(payloads)
