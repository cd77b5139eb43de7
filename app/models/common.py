from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator


def utc_naive_now() -> datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(dt: datetime) -> datetime:
    """Convert to naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    if dt.tzinfo is not None:
        return dt.astimezone(UTC).replace(tzinfo=None)
    return dt


def as_utc(dt: datetime) -> datetime:
    """Stored naive values are UTC; mark them so responses carry the offset."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


# Response-side datetime: always timezone-aware UTC, serialized with a "Z" suffix
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]
