"""Testes dos stores Redis com cliente mockado."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.infra.stores.redis_analytics_store import STATS_TTL_SECONDS, RedisAnalyticsStore
from app.infra.stores.redis_language_store import RedisLanguagePreferenceStore
from app.infra.stores.redis_rate_limiter import RedisRateLimiter
from utils.errors import RedisConnectionError


def _redis_with_pipeline(results: list | None = None, error: Exception | None = None):
    pipeline = MagicMock()
    pipeline.execute = AsyncMock(return_value=results, side_effect=error)
    redis_client = MagicMock()
    redis_client.pipeline.return_value = pipeline
    return redis_client, pipeline


class TestRedisRateLimiter:
    @pytest.mark.asyncio
    async def test_allowed_uses_window_key(self) -> None:
        redis_client, pipeline = _redis_with_pipeline([1, True, 60])
        limiter = RedisRateLimiter(redis_client, window_seconds=60)

        decision = await limiter.check("u1", "dye")

        assert decision.allowed is True
        assert decision.remaining == 19
        pipeline.incr.assert_called_once_with("ratelimit:user:u1:dye")
        pipeline.expire.assert_called_once_with("ratelimit:user:u1:dye", 60, nx=True)
        pipeline.ttl.assert_called_once_with("ratelimit:user:u1:dye")

    @pytest.mark.asyncio
    async def test_denied_uses_ttl_as_retry_after(self) -> None:
        redis_client, _ = _redis_with_pipeline([6, False, 17])
        limiter = RedisRateLimiter(redis_client)

        decision = await limiter.check("u1", "match_image")

        assert decision.allowed is False
        assert decision.retry_after_seconds == 17

    @pytest.mark.asyncio
    async def test_denied_without_ttl_uses_window(self) -> None:
        redis_client, _ = _redis_with_pipeline([6, False, -1])
        limiter = RedisRateLimiter(redis_client, window_seconds=45)

        decision = await limiter.check("u1", "match_image")

        assert decision.retry_after_seconds == 45

    @pytest.mark.asyncio
    async def test_backend_error_raises(self) -> None:
        redis_client, _ = _redis_with_pipeline(error=ConnectionError("down"))

        with pytest.raises(RedisConnectionError):
            await RedisRateLimiter(redis_client).check("u1", "dye")


class TestRedisAnalyticsStore:
    @pytest.mark.asyncio
    async def test_track_command_with_user(self) -> None:
        redis_client, pipeline = _redis_with_pipeline([1, 1, 1, 1, True])
        store = RedisAnalyticsStore(redis_client)

        await store.track_command("dye", "u1", success=True)

        assert [c.args[0] for c in pipeline.incr.call_args_list] == ["stats:total", "stats:success"]
        pipeline.hincrby.assert_called_once_with("stats:commands", "dye", 1)
        users_key = pipeline.sadd.call_args.args[0]
        assert users_key.startswith("stats:users:")
        pipeline.expire.assert_called_once_with(users_key, STATS_TTL_SECONDS)

    @pytest.mark.asyncio
    async def test_track_failure_without_user(self) -> None:
        redis_client, pipeline = _redis_with_pipeline([1, 1, 1])
        store = RedisAnalyticsStore(redis_client)

        await store.track_command("dye", None, success=False)

        assert pipeline.incr.call_args_list[1].args == ("stats:failure",)
        pipeline.sadd.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_stats_decodes(self) -> None:
        redis_client, _ = _redis_with_pipeline(
            [b"10", b"8", b"2", {b"dye": b"7", b"about": b"3"}, 4]
        )

        stats = await RedisAnalyticsStore(redis_client).get_stats()

        assert stats == {
            "total_commands": 10,
            "successful_commands": 8,
            "failed_commands": 2,
            "unique_users": 4,
            "command_breakdown": {"dye": 7, "about": 3},
        }

    @pytest.mark.asyncio
    async def test_get_stats_empty(self) -> None:
        redis_client, _ = _redis_with_pipeline([None, None, None, {}, 0])

        stats = await RedisAnalyticsStore(redis_client).get_stats()

        assert stats["total_commands"] == 0
        assert stats["command_breakdown"] == {}

    @pytest.mark.asyncio
    async def test_errors_wrapped(self) -> None:
        redis_client, _ = _redis_with_pipeline(error=TimeoutError())

        with pytest.raises(RedisConnectionError):
            await RedisAnalyticsStore(redis_client).track_command("dye", "u1", success=True)


class TestRedisLanguagePreferenceStore:
    @pytest.mark.asyncio
    async def test_reads_user_key(self) -> None:
        redis_client = MagicMock()
        redis_client.get = AsyncMock(return_value=b"ja")

        result = await RedisLanguagePreferenceStore(redis_client).get_language("u1")

        assert result == "ja"
        redis_client.get.assert_awaited_once_with("i18n:user:u1")

    @pytest.mark.asyncio
    async def test_missing_preference(self) -> None:
        redis_client = MagicMock()
        redis_client.get = AsyncMock(return_value=None)

        assert await RedisLanguagePreferenceStore(redis_client).get_language("u1") is None

    @pytest.mark.asyncio
    async def test_error_wrapped(self) -> None:
        redis_client = MagicMock()
        redis_client.get = AsyncMock(side_effect=ConnectionError("down"))

        with pytest.raises(RedisConnectionError):
            await RedisLanguagePreferenceStore(redis_client).get_language("u1")
