from datetime import datetime
from decimal import Decimal

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from app.models.common import UtcDatetime, utc_naive_now

# Longest bookable session; also bounds how far back an overlapping booking can start
MAX_DURATION_MINS = 24 * 60


class ServiceBase(SQLModel):
    name: str = Field(max_length=255)
    description: str | None = None
    duration_mins: int = Field(gt=0, le=MAX_DURATION_MINS)
    price: Decimal = Field(max_digits=10, decimal_places=2, ge=0)
    category: str | None = Field(default=None, max_length=100, index=True)
    is_active: bool = Field(default=True, index=True)


class Service(ServiceBase, table=True):
    __tablename__ = "services"
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_naive_now)


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(SQLModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    duration_mins: int | None = Field(default=None, gt=0, le=MAX_DURATION_MINS)
    price: Decimal | None = Field(default=None, max_digits=10, decimal_places=2, ge=0)
    category: str | None = Field(default=None, max_length=100)
    is_active: bool | None = None

    @field_validator("name", "duration_mins", "price", "is_active")
    @classmethod
    def _not_null(cls, v):
        # Omit a field to leave it unchanged; these columns cannot be cleared
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class ServicePublic(ServiceBase):
    id: int
    created_at: UtcDatetime
