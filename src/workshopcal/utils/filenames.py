"""Portable filename helpers."""

import re

_UNSAFE_RUN = re.compile(r"[^A-Za-z0-9]+")


def slugify(value: str, fallback: str = "event") -> str:
    """Lower-case ``value`` and collapse every non-alphanumeric run into '-'.

    Args:
        value: Arbitrary text (may contain spaces, punctuation or non-ASCII).
        fallback: Returned when nothing alphanumeric is left.

    Returns:
        A slug safe to use as a filename on any common filesystem.
    """
    slug = _UNSAFE_RUN.sub("-", value or "").strip("-").lower()
    return slug or fallback


def with_extension(stem: str, extension: str) -> str:
    """Append ``extension`` unless ``stem`` already ends with it (case-insensitive)."""
    if stem.lower().endswith(extension.lower()):
        return stem
    return f"{stem}{extension}"
