"""Utility functions for workshopcal."""

from workshopcal.utils.filenames import slugify, with_extension

__all__ = [
    "slugify",
    "with_extension",
]
