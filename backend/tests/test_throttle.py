from unittest.mock import AsyncMock

import pytest

from puzzle_rsvp.invites.exceptions import RateLimited
from puzzle_rsvp.throttle import AttemptThrottler


@pytest.fixture
def redis():
    redis = AsyncMock()
    redis.incr = AsyncMock()
    redis.expire = AsyncMock()
    redis.ttl = AsyncMock(return_value=30)
    return redis


@pytest.fixture
def throttler(redis):
    return AttemptThrottler(redis, limit=3, window_seconds=60)


async def test_first_hit_starts_window(throttler, redis):
    redis.incr.return_value = 1

    await throttler.hit("tok")

    redis.incr.assert_awaited_once_with("puzzle_rsvp:attempts:tok")
    redis.expire.assert_awaited_once_with("puzzle_rsvp:attempts:tok", 60)


async def test_hits_within_limit_pass(throttler, redis):
    redis.incr.return_value = 3

    await throttler.hit("tok")

    redis.expire.assert_not_awaited()


async def test_hit_over_limit_raises_with_remaining_window(throttler, redis):
    redis.incr.return_value = 4

    with pytest.raises(RateLimited) as exc_info:
        await throttler.hit("tok")

    assert exc_info.value.retry_after == 30


async def test_over_limit_key_without_expiry_is_repaired(throttler, redis):
    redis.incr.return_value = 9
    redis.ttl.return_value = -1

    with pytest.raises(RateLimited) as exc_info:
        await throttler.hit("tok")

    assert exc_info.value.retry_after == 60
    redis.expire.assert_awaited_once_with("puzzle_rsvp:attempts:tok", 60)


async def test_tokens_are_counted_separately(throttler, redis):
    redis.incr.return_value = 1

    await throttler.hit("a")
    await throttler.hit("b")

    keys = [call.args[0] for call in redis.incr.await_args_list]
    assert keys == ["puzzle_rsvp:attempts:a", "puzzle_rsvp:attempts:b"]
