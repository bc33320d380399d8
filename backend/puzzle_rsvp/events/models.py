from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy.sql import func
from sqlmodel import Column, DateTime, Field, SQLModel


class EventBase(SQLModel):
    title: str = Field(max_length=255, nullable=False)
    event_date: date | None = Field(default=None, nullable=True)
    is_active: bool = Field(default=True, nullable=False)


class EventDB(EventBase, table=True):
    __tablename__ = "events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(max_length=100, unique=True, index=True, nullable=False)
    created_at: datetime = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
    updated_at: datetime = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        ),
    )


class EventCreate(EventBase):
    slug: str = Field(min_length=1, max_length=100)


class EventUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=255)
    event_date: date | None = None
    is_active: bool | None = None


class EventRead(SQLModel):
    id: UUID
    slug: str
    title: str
    event_date: date | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
