from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from puzzle_rsvp.database import get_db
from puzzle_rsvp.invites.notifier import SolveNotifier
from puzzle_rsvp.invites.service import PuzzleGate, RsvpGate
from puzzle_rsvp.invites.store import InviteStore
from puzzle_rsvp.puzzles.registry import VerifierRegistry
from puzzle_rsvp.settings import app_settings
from puzzle_rsvp.throttle import AttemptThrottler, get_throttler


def get_invite_store(db: AsyncSession = Depends(get_db)) -> InviteStore:
    return InviteStore(db)


def get_registry(request: Request) -> VerifierRegistry:
    return request.app.state.verifiers


def get_solve_notifier() -> SolveNotifier | None:
    if not app_settings.solve_webhook_url:
        return None
    return SolveNotifier(
        app_settings.solve_webhook_url,
        timeout=app_settings.solve_webhook_timeout,
    )


def get_puzzle_gate(
    store: InviteStore = Depends(get_invite_store),
    registry: VerifierRegistry = Depends(get_registry),
    notifier: SolveNotifier | None = Depends(get_solve_notifier),
) -> PuzzleGate:
    return PuzzleGate(store, registry, notifier)


def get_rsvp_gate(store: InviteStore = Depends(get_invite_store)) -> RsvpGate:
    return RsvpGate(store)


async def throttle_puzzle_attempts(
    token: str,
    throttler: AttemptThrottler = Depends(get_throttler),
) -> None:
    await throttler.hit(token)
