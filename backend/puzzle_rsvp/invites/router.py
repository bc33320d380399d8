from typing import Any

from fastapi import APIRouter, Body, Depends

from puzzle_rsvp.invites.dependencies import (
    get_invite_store,
    get_puzzle_gate,
    get_rsvp_gate,
    throttle_puzzle_attempts,
)
from puzzle_rsvp.invites.schemas import InviteState, PuzzleAttempt, PuzzleResult, RsvpAck
from puzzle_rsvp.invites.service import PuzzleGate, RsvpGate, get_invite_state
from puzzle_rsvp.invites.store import InviteStore

router = APIRouter(prefix="/invites", tags=["invites"])


@router.get("/{token}", response_model=InviteState)
async def read_invite_state(
    token: str,
    store: InviteStore = Depends(get_invite_store),
) -> InviteState:
    """Public view of an invite. Never exposes stored RSVP answers."""
    return await get_invite_state(store, token)


@router.post(
    "/{token}/puzzle",
    response_model=PuzzleResult,
    dependencies=[Depends(throttle_puzzle_attempts)],
)
async def attempt_puzzle(
    token: str,
    attempt: PuzzleAttempt,
    gate: PuzzleGate = Depends(get_puzzle_gate),
) -> PuzzleResult:
    return await gate.attempt_solve(attempt.event_slug, token, attempt.submission)


@router.post("/{token}/rsvp", response_model=RsvpAck)
async def submit_rsvp(
    token: str,
    payload: dict[str, Any] = Body(...),
    gate: RsvpGate = Depends(get_rsvp_gate),
) -> RsvpAck:
    """Store the guest's RSVP, replacing any earlier one."""
    return await gate.submit_rsvp(token, payload)
