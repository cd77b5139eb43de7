from pydantic import EmailStr, field_validator
from sqlmodel import Field, SQLModel


class ClientBase(SQLModel):
    email: str = Field(unique=True, index=True)
    name: str
    phone: str | None = Field(default=None, max_length=20)


class Client(ClientBase, table=True):
    __tablename__ = "clients"
    id: int | None = Field(default=None, primary_key=True)


class ClientCreate(ClientBase):
    email: EmailStr
    name: str = Field(min_length=1, max_length=255)


class ClientUpdate(SQLModel):
    """Email is the client's identity and is not editable here; phone may be cleared."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=20)

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class ClientPublic(ClientBase):
    id: int
