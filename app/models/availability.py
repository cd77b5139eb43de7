from datetime import time

from pydantic import model_validator
from sqlmodel import Field, SQLModel


class Availability(SQLModel, table=True):
    """Recurring weekly open period. day_of_week: 0 = Sunday .. 6 = Saturday."""

    __tablename__ = "availability"
    id: int | None = Field(default=None, primary_key=True)
    day_of_week: int = Field(index=True, ge=0, le=6)
    start_time: time
    end_time: time
    is_active: bool = Field(default=True, index=True)


class AvailabilityPublic(SQLModel):
    id: int
    day_of_week: int
    start_time: time
    end_time: time


class AvailabilityWindowIn(SQLModel):
    """One window in a weekly schedule submission. id is a stored row id, or "new-*"
    / absent for a window to insert."""

    id: int | str | None = None
    day_of_week: int = Field(ge=0, le=6)
    start_time: time
    end_time: time

    @model_validator(mode="after")
    def _start_before_end(self) -> "AvailabilityWindowIn":
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class WeeklyAvailabilityUpdate(SQLModel):
    availability: list[AvailabilityWindowIn]

    @model_validator(mode="after")
    def _no_overlap_within_day(self) -> "WeeklyAvailabilityUpdate":
        by_day: dict[int, list[AvailabilityWindowIn]] = {}
        for w in self.availability:
            by_day.setdefault(w.day_of_week, []).append(w)
        for day, windows in by_day.items():
            windows.sort(key=lambda w: w.start_time)
            for prev, nxt in zip(windows, windows[1:]):
                if nxt.start_time < prev.end_time:
                    raise ValueError(f"Availability windows overlap on day {day}")
        return self

    @model_validator(mode="after")
    def _unique_ids(self) -> "WeeklyAvailabilityUpdate":
        seen: set[str] = set()
        for w in self.availability:
            if w.id is None:
                continue
            key = str(w.id)
            if key in seen:
                raise ValueError(f"Duplicate availability window id {key}")
            seen.add(key)
        return self
