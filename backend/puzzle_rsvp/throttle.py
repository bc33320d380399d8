import logging

from fastapi import Request
from redis.asyncio import Redis

from puzzle_rsvp.invites.exceptions import RateLimited
from puzzle_rsvp.settings import app_settings

logger = logging.getLogger(__name__)


class AttemptThrottler:
    """Fixed-window attempt counter in Redis, keyed by invite token."""

    def __init__(
        self,
        redis: Redis,
        *,
        limit: int,
        window_seconds: int,
        prefix: str = "puzzle_rsvp:attempts",
    ):
        self.redis = redis
        self.limit = limit
        self.window_seconds = window_seconds
        self._prefix = prefix

    def _key(self, token: str) -> str:
        return f"{self._prefix}:{token}"

    async def hit(self, token: str) -> None:
        """Count one attempt; raise :class:`RateLimited` once over the limit."""
        key = self._key(token)
        count = await self.redis.incr(key)
        if count == 1:
            await self.redis.expire(key, self.window_seconds)

        if count > self.limit:
            ttl = await self.redis.ttl(key)
            if ttl < 0:
                # Key lost its expiry (e.g. crash between INCR and EXPIRE)
                await self.redis.expire(key, self.window_seconds)
                ttl = self.window_seconds
            logger.info("Throttled puzzle attempts for token %s...", token[:6])
            raise RateLimited(retry_after=ttl)


def get_throttler(request: Request) -> AttemptThrottler:
    return AttemptThrottler(
        request.app.state.redis,
        limit=app_settings.puzzle_attempt_limit,
        window_seconds=app_settings.puzzle_attempt_window_seconds,
    )
