from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from sqlmodel import Column, DateTime, Field, SQLModel


class RsvpStatus(str, Enum):
    accepted = "accepted"
    declined = "declined"


class InviteDB(SQLModel, table=True):
    __tablename__ = "invites"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(unique=True, index=True)
    event_slug: str = Field(foreign_key="events.slug", index=True, nullable=False)
    guest_name: str = Field(max_length=255, nullable=False)
    puzzle_solved: bool = Field(default=False, nullable=False)
    rsvp_status: RsvpStatus | None = Field(default=None, nullable=True)
    rsvp_data: dict[str, Any] | None = Field(
        default=None, sa_column=Column(JSONB, nullable=True)
    )
    created_at: datetime = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
    solved_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    rsvp_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
