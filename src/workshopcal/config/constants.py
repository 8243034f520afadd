"""Centralized constants for workshopcal.

Defaults mirror the workshop programme published on the website; every
value here can be overridden through ``WorkshopConfig`` / ``load_config``.
"""

# ICS calendar constants
ICS_PRODID = "-//YAAB Impact//Workshops//EN"
ICS_VERSION = "2.0"
ICS_CALSCALE = "GREGORIAN"
ICS_METHOD = "PUBLISH"
UID_PREFIX = "yaab-"
UID_DOMAIN = "yaabimpact.org.uk"

# Download constants
CALENDAR_MEDIA_TYPE = "text/calendar"
DATA_URI_PREFIX = "data:text/calendar;charset=utf8,"
ICS_FILE_EXTENSION = ".ics"

# Characters encodeURIComponent leaves untouched (besides ASCII alphanumerics)
URI_COMPONENT_SAFE = "-_.!~*'()"

# Event id format; ids are derived from the 1-based occurrence number
EVENT_ID_FORMAT = "ws-{number}"
TITLE_NUMBER_PLACEHOLDER = "{number}"

# Default workshop programme
DEFAULT_WEEKDAY = 6  # Saturday (0=Sunday)
DEFAULT_START_TIME = "10:00"
DEFAULT_OCCURRENCES = 12
DEFAULT_INTERVAL_DAYS = 7
DEFAULT_DURATION_MINUTES = 120
DEFAULT_CAPACITY = 10
DEFAULT_LOCATION = "Community Hub"
DEFAULT_PRICE_LABEL = "Free"
DEFAULT_IMAGES_COUNT = 6
DEFAULT_IMAGE_PATTERN = "/assets/workshop-bg/img{index}.jpg"
DEFAULT_TITLE = "Economical Cooking — Week {number}"
DEFAULT_DESCRIPTION = (
    "Hands-on session teaching low-cost meals, batch cooking and shopping "
    "tips to save money and eat healthily."
)
DEFAULT_DISPLAY_TIMEZONE = "UTC"

# Environment variable names (WORKSHOPS_ prefix)
ENV_PREFIX = "WORKSHOPS_"
ENV_FIELDS = {
    "TIMEZONE": "timezone",
    "START_WEEKDAY": "start_weekday",
    "START_TIME": "start_time",
    "OCCURRENCES": "occurrences",
    "INTERVAL_DAYS": "interval_days",
    "DURATION_MINUTES": "duration_minutes",
    "CAPACITY": "capacity",
    "LOCATION": "location",
    "PRICE": "price",
    "IMAGES_COUNT": "images_count",
    "IMAGE_PATTERN": "image_pattern",
    "TITLE": "title",
    "DESCRIPTION": "description",
    "UID_DOMAIN": "uid_domain",
}

# Display strings
ALL_MONTHS_KEY = "all"
ALL_MONTHS_LABEL = "All months"
META_SEPARATOR = " • "
DISPLAY_DATE_FORMAT = "%a %b %d %Y"
DISPLAY_TIME_FORMAT = "%H:%M"
MONTH_LABEL_FORMAT = "%B %Y"
DEFAULT_SIGNUP_VALUE = "Workshop"

# Weekday names indexed with 0=Sunday
WEEKDAY_NAMES = [
    "Sunday", "Monday", "Tuesday", "Wednesday",
    "Thursday", "Friday", "Saturday",
]

# Timezone abbreviation to IANA zone mapping
# Maps common (and DST) abbreviations to canonical IANA zones that understand DST
ABBR_TO_TZ = {
    # North America
    "EST": "America/New_York",
    "EDT": "America/New_York",
    "CST": "America/Chicago",
    "CDT": "America/Chicago",
    "MST": "America/Denver",
    "MDT": "America/Denver",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    # United Kingdom / Europe
    "GMT": "Europe/London",
    "BST": "Europe/London",
    "CET": "Europe/Paris",
    "CEST": "Europe/Paris",
    "EET": "Europe/Athens",
    "EEST": "Europe/Athens",
    # Australia
    "AEST": "Australia/Sydney",
    "AEDT": "Australia/Sydney",
    # Asia
    "IST": "Asia/Kolkata",
}
