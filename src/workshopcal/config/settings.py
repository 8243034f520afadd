"""Workshop programme settings.

Settings are compiled-in defaults, optionally overridden by ``WORKSHOPS_*``
variables from a ``.env`` file and then from the process environment.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

from dotenv import dotenv_values

from workshopcal.config import constants
from workshopcal.exceptions.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkshopConfig:
    """Everything needed to generate and publish the workshop programme."""

    timezone: str = constants.DEFAULT_DISPLAY_TIMEZONE
    start_weekday: int = constants.DEFAULT_WEEKDAY
    start_time: str = constants.DEFAULT_START_TIME
    occurrences: int = constants.DEFAULT_OCCURRENCES
    interval_days: int = constants.DEFAULT_INTERVAL_DAYS
    duration_minutes: int = constants.DEFAULT_DURATION_MINUTES
    capacity: int = constants.DEFAULT_CAPACITY
    location: str = constants.DEFAULT_LOCATION
    price: str = constants.DEFAULT_PRICE_LABEL
    images_count: int = constants.DEFAULT_IMAGES_COUNT
    image_pattern: str = constants.DEFAULT_IMAGE_PATTERN
    title: str = constants.DEFAULT_TITLE
    description: str = constants.DEFAULT_DESCRIPTION
    uid_domain: str = constants.UID_DOMAIN

    def rule(self) -> "RecurrenceRule":
        """Build the RecurrenceRule for this programme."""
        from workshopcal.core.event_model import AnchorTime, RecurrenceRule

        return RecurrenceRule(
            anchor_weekday=self.start_weekday,
            anchor_time=AnchorTime.parse(self.start_time),
            occurrence_count=self.occurrences,
            interval_days=self.interval_days,
            duration_minutes=self.duration_minutes,
        )

    def templates(self) -> Tuple["EventTemplate", ...]:
        """One template per background image, sharing title and description."""
        from workshopcal.core.event_model import EventTemplate

        if self.images_count < 1:
            raise InvalidConfigurationError(
                f"images_count must be at least 1, got {self.images_count}",
                field="images_count",
            )
        return tuple(
            EventTemplate(
                title=self.title,
                description=self.description,
                image_ref=self.image_pattern.format(index=index),
            )
            for index in range(1, self.images_count + 1)
        )

    def details(self) -> "EventDetails":
        from workshopcal.core.event_model import EventDetails

        return EventDetails(
            location=self.location,
            capacity=self.capacity,
            price_label=self.price,
        )


DEFAULT_CONFIG = WorkshopConfig()


def load_config(
    env_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    base: WorkshopConfig = DEFAULT_CONFIG,
) -> WorkshopConfig:
    """Load settings, layering a .env file and the environment over ``base``.

    Args:
        env_file: Optional path to a .env file. A missing file is ignored.
        environ: Mapping to read overrides from (default: ``os.environ``).
        base: Configuration to start from.

    Returns:
        The resulting WorkshopConfig.

    Raises:
        InvalidConfigurationError: If an integer setting is not a number.
    """
    values = {}
    if env_file is not None:
        path = Path(env_file)
        if path.exists():
            # Parse without mutating os.environ
            values.update({k: v for k, v in dotenv_values(path).items() if v is not None})
        else:
            logger.warning("Settings file %s not found; using defaults", path)

    source = os.environ if environ is None else environ
    values.update({k: v for k, v in source.items() if k.startswith(constants.ENV_PREFIX)})

    overrides = {}
    field_types = {f.name: f.type for f in dataclasses.fields(WorkshopConfig)}
    for suffix, field_name in constants.ENV_FIELDS.items():
        raw = values.get(constants.ENV_PREFIX + suffix)
        if raw is None:
            continue
        overrides[field_name] = _coerce(field_name, raw, field_types[field_name])

    if overrides:
        logger.debug("Applying settings overrides: %s", sorted(overrides))
    return dataclasses.replace(base, **overrides)


def _coerce(field_name: str, raw: str, field_type) -> Union[int, str]:
    value = str(raw).strip()
    if field_type in (int, "int"):
        try:
            return int(value)
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"Setting {field_name} must be an integer, got '{raw}'",
                field=field_name,
            ) from exc
    return value
