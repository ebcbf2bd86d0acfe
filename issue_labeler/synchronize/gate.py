"""Cutoff pre-filter deciding whether an issue is old enough to be exempt from labeling."""

from datetime import datetime, timezone

import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def as_utc(value: datetime) -> datetime:
    """Return an aware datetime, taking naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_before_cutoff(created_at: datetime | None, cutoff: datetime | None) -> bool:
    """Return True if the issue was created strictly before the cutoff instant.

    No cutoff means nothing is exempt. An issue with an unknown creation time
    is not exempt either.
    """
    if cutoff is None:
        return False
    if created_at is None:
        logger.warning("Issue creation time is unknown, cutoff not applied", cutoff=cutoff.isoformat())
        return False
    return as_utc(created_at) < as_utc(cutoff)
