"""Configuration module for workshopcal."""

from workshopcal.config.settings import DEFAULT_CONFIG, WorkshopConfig, load_config
from workshopcal.config.constants import (
    ICS_PRODID,
    UID_PREFIX,
    UID_DOMAIN,
    CALENDAR_MEDIA_TYPE,
    DATA_URI_PREFIX,
    ENV_PREFIX,
)

__all__ = [
    "DEFAULT_CONFIG",
    "WorkshopConfig",
    "load_config",
    "ICS_PRODID",
    "UID_PREFIX",
    "UID_DOMAIN",
    "CALENDAR_MEDIA_TYPE",
    "DATA_URI_PREFIX",
    "ENV_PREFIX",
]
