"""User-friendly error message handling."""

from workshopcal.exceptions.errors import (
    EventNotFoundError,
    InvalidConfigurationError,
    InvalidEventError,
)


# Error message mappings for user-friendly display
ERROR_MAPPINGS = {
    "parse ics": "One of the calendar files could not be read.",
    "no ics data": "There are no workshops to add to your calendar.",
}


def get_user_friendly_error(error: Exception) -> str:
    """Convert an exception to a user-friendly error message.

    Args:
        error: The exception to convert.

    Returns:
        A user-friendly error message string.
    """
    if isinstance(error, EventNotFoundError):
        return "That workshop is no longer available. Please refresh the page."

    if isinstance(error, InvalidEventError):
        return "This workshop can't be added to your calendar right now."

    if isinstance(error, InvalidConfigurationError):
        if error.field:
            return f"The workshop schedule is misconfigured ({error.field}): {error}"
        return f"The workshop schedule is misconfigured: {error}"

    error_str = str(error).lower()
    for pattern, message in ERROR_MAPPINGS.items():
        if pattern in error_str:
            return message

    return f"An error occurred: {str(error)}"


def format_error_for_status(error: Exception) -> str:
    """Format an error for a one-line status message.

    Args:
        error: The exception to format.

    Returns:
        A short status message.
    """
    friendly = get_user_friendly_error(error)
    if len(friendly) > 100:
        return friendly[:97] + "..."
    return friendly
