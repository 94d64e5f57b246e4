"""Custom SQLAlchemy types used by the persistence layer."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.types import DateTime, Integer, TypeDecorator

from jobtracker.utils.statuses import ApplicationStatus


class StatusCode(TypeDecorator[ApplicationStatus]):
    """Persist ``ApplicationStatus`` as its integer code.

    Unknown codes are rejected on write; on read the stored integer is
    turned back into the enum so callers never see bare ints.
    """

    cache_ok = True
    impl = Integer

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        return int(ApplicationStatus(value))

    def process_result_value(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        return ApplicationStatus(value)


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetime normalized to UTC.

    SQLite has no native timezone support and hands back naive values; those
    are re-labelled as UTC on read. Naive values on write are assumed UTC.
    Storing everything in UTC keeps ``ORDER BY`` chronological on SQLite,
    where datetimes are compared as text.
    """

    cache_ok = True
    impl = DateTime(timezone=True)

    def process_bind_param(self, value: Optional[datetime], dialect):  # type: ignore[override]
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect):  # type: ignore[override]
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
