from datetime import datetime

from pydantic import model_validator
from sqlmodel import Field, SQLModel

from app.models.common import UtcDatetime, to_naive_utc, utc_naive_now


class BlockedTime(SQLModel, table=True):
    """Absolute interval (naive UTC) closed to bookings regardless of availability."""

    __tablename__ = "blocked_times"
    id: int | None = Field(default=None, primary_key=True)
    start_datetime: datetime = Field(index=True)
    end_datetime: datetime = Field(index=True)
    reason: str | None = None
    created_at: datetime = Field(default_factory=utc_naive_now)


class BlockedTimePublic(SQLModel):
    id: int
    start_datetime: UtcDatetime
    end_datetime: UtcDatetime
    reason: str | None = None
    created_at: UtcDatetime


class BlockedTimeCreate(SQLModel):
    start_datetime: datetime
    end_datetime: datetime
    reason: str | None = None

    @model_validator(mode="after")
    def _normalize(self) -> "BlockedTimeCreate":
        self.start_datetime = to_naive_utc(self.start_datetime)
        self.end_datetime = to_naive_utc(self.end_datetime)
        if self.start_datetime >= self.end_datetime:
            raise ValueError("start_datetime must be before end_datetime")
        return self
