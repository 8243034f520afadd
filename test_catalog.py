"""Tests for the session event catalog and display formatting."""

import unittest
from datetime import datetime, timedelta

import pytz
from icalendar import Calendar

from workshopcal.config.settings import DEFAULT_CONFIG, WorkshopConfig
from workshopcal.core.event_model import AnchorTime, EventTemplate, RecurrenceRule
from workshopcal.core.recurrence import generate
from workshopcal.exceptions.errors import EventNotFoundError, InvalidConfigurationError
from workshopcal.ui.catalog import EventCatalog
from workshopcal.ui.display import (
    format_event_date,
    format_event_meta,
    format_event_time,
    month_label,
)

UTC = pytz.utc
# Wednesday before the first Saturday workshop
NOW = datetime(2026, 10, 21, 9, 0, tzinfo=UTC)
STAMP = datetime(2026, 10, 21, 9, 0, tzinfo=UTC)


class TestCatalogFromDefaults(unittest.TestCase):
    """The default programme: twelve Saturday workshops."""

    def setUp(self):
        self.catalog = EventCatalog.from_config(DEFAULT_CONFIG, NOW)

    def test_generates_twelve_workshops_in_order(self):
        self.assertEqual(len(self.catalog), 12)
        self.assertEqual(list(self.catalog), [f"ws-{n}" for n in range(1, 13)])
        self.assertEqual(self.catalog["ws-1"].start_at, datetime(2026, 10, 24, 10, 0, tzinfo=UTC))
        self.assertEqual(self.catalog["ws-12"].start_at, datetime(2027, 1, 9, 10, 0, tzinfo=UTC))

    def test_titles_and_images_follow_templates(self):
        self.assertEqual(self.catalog["ws-7"].title, "Economical Cooking — Week 7")
        self.assertEqual(self.catalog["ws-1"].image_ref, "/assets/workshop-bg/img1.jpg")
        self.assertEqual(self.catalog["ws-6"].image_ref, "/assets/workshop-bg/img6.jpg")
        self.assertEqual(self.catalog["ws-7"].image_ref, "/assets/workshop-bg/img1.jpg")

    def test_unknown_id(self):
        with self.assertRaises(EventNotFoundError):
            self.catalog["ws-99"]
        with self.assertRaises(KeyError):
            self.catalog["ws-99"]
        self.assertNotIn("ws-99", self.catalog)
        self.assertIsNone(self.catalog.get("ws-99"))

    def test_month_options(self):
        self.assertEqual(self.catalog.month_options(), [
            ("all", "All months"),
            ("2026-10", "October 2026"),
            ("2026-11", "November 2026"),
            ("2026-12", "December 2026"),
            ("2027-01", "January 2027"),
        ])

    def test_in_month(self):
        self.assertEqual(len(self.catalog.in_month()), 12)
        self.assertEqual([e.id for e in self.catalog.in_month("2026-10")], ["ws-1", "ws-2"])
        self.assertEqual(len(self.catalog.in_month("2026-11")), 4)
        self.assertEqual(self.catalog.in_month("2030-01"), [])

    def test_signup_value(self):
        self.assertEqual(self.catalog.signup_value("ws-3"), "Economical Cooking — Week 3")
        self.assertEqual(self.catalog.signup_value(None), "Workshop")
        with self.assertRaises(EventNotFoundError):
            self.catalog.signup_value("ws-0")

    def test_cards(self):
        cards = self.catalog.cards("2026-10")

        self.assertEqual(len(cards), 2)
        first = cards[0]
        self.assertEqual(first["meta"], "Sat Oct 24 2026 • 10:00")
        self.assertEqual(first["list_meta"], "Sat Oct 24 2026 • 10:00 • Community Hub")
        self.assertEqual(first["ics_filename"], "ws-1-economical-cooking-week-1.ics")
        self.assertTrue(first["ics_href"].startswith("data:text/calendar;charset=utf8,"))
        self.assertEqual(first["signup_value"], first["title"])
        self.assertIsNone(self.catalog.cards(with_links=False)[0]["ics_href"])

    def test_download(self):
        download = self.catalog.download("ws-2", stamp=STAMP)

        self.assertEqual(download.filename, "ws-2-economical-cooking-week-2.ics")
        self.assertIn("UID:yaab-ws-2@yaabimpact.org.uk", download.text.split("\r\n"))
        self.assertIn("DTSTART:20261031T100000Z", download.text.split("\r\n"))

    def test_export_all(self):
        combined = self.catalog.export_all(stamp=STAMP)
        merged = Calendar.from_ical(combined.encode("utf-8"))

        uids = [str(event["UID"]) for event in merged.walk("VEVENT")]
        self.assertEqual(len(uids), 12)
        self.assertEqual(len(set(uids)), 12)


class TestCatalogDisplayTimezone(unittest.TestCase):
    """Display follows the configured zone; export stays in UTC."""

    def test_london_display_keeps_utc_export(self):
        config = WorkshopConfig(timezone="Europe/London", occurrences=3)
        catalog = EventCatalog.from_config(config, NOW)

        # 24 Oct 2026 is still BST, 7 Nov is GMT
        self.assertEqual(format_event_time(catalog["ws-1"], catalog.tz), "11:00")
        self.assertEqual(format_event_time(catalog["ws-3"], catalog.tz), "10:00")
        self.assertIn("DTSTART:20261024T100000Z", catalog.download("ws-1", stamp=STAMP).text.split("\r\n"))
        self.assertIsNone(catalog.timezone_warning)

    def test_abbreviation_is_resolved(self):
        catalog = EventCatalog.from_config(WorkshopConfig(timezone="EST", occurrences=1), NOW)

        self.assertEqual(format_event_time(catalog["ws-1"], catalog.tz), "06:00")

    def test_unknown_timezone_falls_back_to_utc(self):
        catalog = EventCatalog.from_config(WorkshopConfig(timezone="Mars/Olympus", occurrences=1), NOW)

        self.assertIsNotNone(catalog.timezone_warning)
        self.assertIs(catalog.tz, pytz.utc)
        self.assertEqual(format_event_meta(catalog["ws-1"], catalog.tz), "Sat Oct 24 2026 • 10:00")

    def test_month_boundary_uses_display_zone(self):
        rule = RecurrenceRule(anchor_weekday=6, anchor_time=AnchorTime(23, 30), occurrence_count=1)
        # 2026-10-31 23:30 UTC is already 1 November in Berlin (CET, +1)
        sunday = datetime(2026, 10, 25, 12, 0, tzinfo=UTC)
        events = generate(rule, [EventTemplate(title="Late")], sunday)
        catalog = EventCatalog(events, display_timezone="Europe/Berlin")

        self.assertEqual(format_event_date(events[0], catalog.tz), "Sun Nov 01 2026")
        self.assertEqual(catalog.in_month("2026-10"), [])
        self.assertEqual(len(catalog.in_month("2026-11")), 1)


class TestCatalogValidation(unittest.TestCase):

    def test_duplicate_ids_rejected(self):
        events = generate(
            RecurrenceRule(anchor_weekday=6, anchor_time=AnchorTime(10), occurrence_count=2),
            [EventTemplate(title="A")],
            NOW,
        )
        with self.assertRaises(InvalidConfigurationError):
            EventCatalog([events[0], events[0]])

    def test_regeneration_keeps_ids(self):
        first = EventCatalog.from_config(DEFAULT_CONFIG, NOW)
        second = EventCatalog.from_config(DEFAULT_CONFIG, NOW + timedelta(days=8))

        self.assertEqual(list(first), list(second))


class TestMonthLabel(unittest.TestCase):

    def test_month_label(self):
        self.assertEqual(month_label("2027-01"), "January 2027")


if __name__ == "__main__":
    unittest.main()
