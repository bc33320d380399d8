from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class InviteState(BaseModel):
    """What a link holder may see about an invite.

    ``rsvp_data`` and ``rsvp_status`` are deliberately absent; ``has_rsvp``
    only says whether a response exists.
    """

    guest_name: str
    event_slug: str
    puzzle_solved: bool
    has_rsvp: bool


class PuzzleAttempt(BaseModel):
    event_slug: str
    submission: Any = None


class PuzzleResult(BaseModel):
    solved: bool


class RsvpAck(BaseModel):
    accepted: bool = True


class InviteCreate(BaseModel):
    guest_name: str = Field(min_length=1, max_length=255)


class InviteAdminRead(BaseModel):
    id: UUID
    token: str
    event_slug: str
    guest_name: str
    puzzle_solved: bool
    rsvp_status: str | None = None
    rsvp_data: dict[str, Any] | None = None
    invite_url: str | None = None
    created_at: datetime
    solved_at: datetime | None = None
    rsvp_at: datetime | None = None
