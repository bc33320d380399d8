import logging
import secrets
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from puzzle_rsvp.invites.exceptions import InviteNotFound
from puzzle_rsvp.invites.models import InviteDB, RsvpStatus
from puzzle_rsvp.settings import app_settings

logger = logging.getLogger(__name__)

TOKEN_ATTEMPTS = 3
TOKEN_CONSTRAINT = "ix_invites_token"

STATUS_KEYS = ("rsvp_status", "status", "attending")
ACCEPTED_VALUES = {"yes", "y", "true", "accept", "accepted", "attending"}
DECLINED_VALUES = {"no", "n", "false", "decline", "declined", "not attending"}


def generate_token() -> str:
    return secrets.token_urlsafe(app_settings.token_bytes)


def _is_token_collision(error: IntegrityError) -> bool:
    return TOKEN_CONSTRAINT in str(error.orig)


def derive_rsvp_status(payload: dict[str, Any]) -> RsvpStatus:
    """Read the response out of an event-defined RSVP payload.

    The first status-like key present decides; anything unrecognised counts
    as an acceptance since a guest who bothered to submit is responding.
    """
    for key in STATUS_KEYS:
        if key not in payload:
            continue
        value = payload[key]
        if isinstance(value, bool):
            return RsvpStatus.accepted if value else RsvpStatus.declined
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in ACCEPTED_VALUES:
                return RsvpStatus.accepted
            if normalized in DECLINED_VALUES:
                return RsvpStatus.declined
        break
    return RsvpStatus.accepted


class InviteStore:
    """Sole writer of invite rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, token: str) -> InviteDB | None:
        result = await self.db.execute(select(InviteDB).where(InviteDB.token == token))
        return result.scalar_one_or_none()

    async def mark_solved(self, token: str) -> datetime | None:
        """Latch ``puzzle_solved`` with a compare-and-set.

        Returns the solve time when this call flipped the latch, ``None`` when
        the invite was already solved (or does not exist).
        """
        solved_at = datetime.now(timezone.utc)
        result = await self.db.execute(
            update(InviteDB)
            .where(InviteDB.token == token, InviteDB.puzzle_solved.is_(False))
            .values(puzzle_solved=True, solved_at=solved_at)
        )
        await self.db.commit()
        if result.rowcount != 1:
            return None
        return solved_at

    async def upsert_rsvp(self, token: str, payload: dict[str, Any]) -> None:
        result = await self.db.execute(
            update(InviteDB)
            .where(InviteDB.token == token)
            .values(
                rsvp_data=payload,
                rsvp_status=derive_rsvp_status(payload),
                rsvp_at=datetime.now(timezone.utc),
            )
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise InviteNotFound()
        await self.db.commit()

    async def create(self, event_slug: str, guest_name: str) -> InviteDB:
        for _ in range(TOKEN_ATTEMPTS):
            invite = InviteDB(
                token=generate_token(),
                event_slug=event_slug,
                guest_name=guest_name,
            )
            self.db.add(invite)
            try:
                await self.db.commit()
            except IntegrityError as e:
                await self.db.rollback()
                if not _is_token_collision(e):
                    raise
                logger.warning("Token collision creating invite for %s, retrying", event_slug)
                continue
            await self.db.refresh(invite)
            return invite
        raise RuntimeError(f"Could not allocate a unique invite token for {event_slug}")

    async def list_for_event(self, event_slug: str) -> list[InviteDB]:
        result = await self.db.execute(
            select(InviteDB)
            .where(InviteDB.event_slug == event_slug)
            .order_by(InviteDB.created_at.asc())
        )
        return list(result.scalars().all())
