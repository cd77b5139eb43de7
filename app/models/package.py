from datetime import datetime
from decimal import Decimal

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from app.models.common import UtcDatetime, utc_naive_now


class PackageBase(SQLModel):
    """Prepaid bundle of sessions, valid for validity_days after purchase."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    session_count: int = Field(gt=0)
    price: Decimal = Field(max_digits=10, decimal_places=2, ge=0)
    validity_days: int = Field(gt=0)
    is_active: bool = Field(default=True, index=True)


class Package(PackageBase, table=True):
    __tablename__ = "packages"
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_naive_now)


class PackageCreate(PackageBase):
    pass


class PackageUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    session_count: int | None = Field(default=None, gt=0)
    price: Decimal | None = Field(default=None, max_digits=10, decimal_places=2, ge=0)
    validity_days: int | None = Field(default=None, gt=0)
    is_active: bool | None = None

    @field_validator("name", "session_count", "price", "validity_days", "is_active")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class PackagePublic(PackageBase):
    id: int
    created_at: UtcDatetime
