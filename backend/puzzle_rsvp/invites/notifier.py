import asyncio
import logging
from datetime import datetime

import httpx

from puzzle_rsvp.invites.models import InviteDB

logger = logging.getLogger(__name__)

# Strong references to in-flight webhook tasks; the event loop only keeps
# weak ones.
_pending_tasks: set[asyncio.Task] = set()


async def wait_for_pending() -> None:
    """Let in-flight webhooks finish. Called on application shutdown."""
    if _pending_tasks:
        await asyncio.gather(*_pending_tasks, return_exceptions=True)


class SolveNotifier:
    """Posts a webhook when an invite's puzzle is solved for the first time.

    The token is never included in the payload: it is the guest's credential.
    """

    def __init__(self, webhook_url: str, timeout: float = 5.0, client: httpx.AsyncClient | None = None):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client = client

    def schedule(self, invite: InviteDB, solved_at: datetime) -> asyncio.Task:
        """Send the webhook in the background so the caller never waits on it."""
        task = asyncio.create_task(self.notify(invite, solved_at))
        _pending_tasks.add(task)
        task.add_done_callback(_pending_tasks.discard)
        return task

    async def notify(self, invite: InviteDB, solved_at: datetime) -> None:
        payload = {
            "event": "puzzle.solved",
            "event_slug": invite.event_slug,
            "guest_name": invite.guest_name,
            "solved_at": solved_at.isoformat(),
        }
        try:
            if self._client is not None:
                response = await self._client.post(self.webhook_url, json=payload, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.webhook_url, json=payload)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Solve webhook failed for event {invite.event_slug}: {e}")
