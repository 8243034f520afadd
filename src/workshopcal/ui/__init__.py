"""Presentation helpers consumed by the website glue and the CLI."""

from workshopcal.ui.catalog import EventCatalog
from workshopcal.ui.error_messages import format_error_for_status, get_user_friendly_error

__all__ = ["EventCatalog", "format_error_for_status", "get_user_friendly_error"]
