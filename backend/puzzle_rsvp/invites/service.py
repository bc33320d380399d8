import logging
from typing import Any

from puzzle_rsvp.invites.exceptions import InviteNotFound, RsvpForbidden
from puzzle_rsvp.invites.notifier import SolveNotifier
from puzzle_rsvp.invites.schemas import InviteState, PuzzleResult, RsvpAck
from puzzle_rsvp.invites.store import InviteStore
from puzzle_rsvp.puzzles.registry import VerifierRegistry
from puzzle_rsvp.settings import app_settings

logger = logging.getLogger(__name__)


def _short(token: str) -> str:
    return f"{token[:6]}..."


async def get_invite_state(store: InviteStore, token: str) -> InviteState:
    invite = await store.get(token)
    if invite is None:
        raise InviteNotFound()
    return InviteState(
        guest_name=invite.guest_name,
        event_slug=invite.event_slug,
        puzzle_solved=invite.puzzle_solved,
        has_rsvp=invite.rsvp_status is not None,
    )


class PuzzleGate:
    """Checks puzzle submissions and latches the solved state.

    This is the only place a solved state is persisted; verifiers just answer
    yes or no.
    """

    def __init__(
        self,
        store: InviteStore,
        registry: VerifierRegistry,
        notifier: SolveNotifier | None = None,
    ):
        self.store = store
        self.registry = registry
        self.notifier = notifier

    async def attempt_solve(self, event_slug: str, token: str, submission: Any) -> PuzzleResult:
        invite = await self.store.get(token)
        if invite is None or invite.event_slug != event_slug:
            raise InviteNotFound()

        if invite.puzzle_solved:
            return PuzzleResult(solved=True)

        verifier = self.registry.resolve(event_slug)

        try:
            accepted = verifier.evaluate(submission) is True
        except Exception:
            logger.exception("Verifier for event %s raised; treating as unsolved", event_slug)
            accepted = False

        if not accepted:
            return PuzzleResult(solved=False)

        solved_at = await self.store.mark_solved(token)
        if solved_at is not None:
            logger.info("Invite %s solved puzzle for event %s", _short(token), event_slug)
            if self.notifier is not None:
                self.notifier.schedule(invite, solved_at)
        return PuzzleResult(solved=True)


class RsvpGate:
    def __init__(self, store: InviteStore):
        self.store = store

    async def submit_rsvp(self, token: str, payload: dict[str, Any]) -> RsvpAck:
        invite = await self.store.get(token)
        if invite is None:
            raise InviteNotFound()

        # Always re-read: the client's claim of having solved is never trusted
        if not invite.puzzle_solved:
            raise RsvpForbidden()

        await self.store.upsert_rsvp(token, payload)
        return RsvpAck(accepted=True)


def build_invite_url(token: str) -> str:
    return f"{app_settings.frontend_url}/invite/{token}"
