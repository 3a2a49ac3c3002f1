"""Contadores de uso de comandos em Redis."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.protocols.analytics import AnalyticsStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

STATS_PREFIX = "stats:"
STATS_TTL_SECONDS = 30 * 24 * 60 * 60


def _today() -> str:
    return datetime.now(tz=UTC).strftime("%Y-%m-%d")


def _decode(value: bytes | str) -> str:
    return value.decode() if isinstance(value, bytes) else value


class RedisAnalyticsStore(AnalyticsStoreProtocol):
    """Analytics em Redis: contadores globais, hash por comando e set diário de usuários."""

    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._redis = async_redis_client

    async def track_command(
        self,
        command: str,
        user_id: str | None,
        *,
        success: bool,
        guild_id: str | None = None,
    ) -> None:
        users_key = f"{STATS_PREFIX}users:{_today()}"
        try:
            pipeline = self._redis.pipeline()
            pipeline.incr(f"{STATS_PREFIX}total")
            pipeline.incr(f"{STATS_PREFIX}{'success' if success else 'failure'}")
            pipeline.hincrby(f"{STATS_PREFIX}commands", command, 1)
            if user_id:
                pipeline.sadd(users_key, user_id)
                pipeline.expire(users_key, STATS_TTL_SECONDS)
            await pipeline.execute()
        except Exception as exc:
            raise RedisConnectionError("Falha ao registrar analytics no Redis") from exc

    async def get_stats(self) -> dict[str, Any]:
        try:
            pipeline = self._redis.pipeline()
            pipeline.get(f"{STATS_PREFIX}total")
            pipeline.get(f"{STATS_PREFIX}success")
            pipeline.get(f"{STATS_PREFIX}failure")
            pipeline.hgetall(f"{STATS_PREFIX}commands")
            pipeline.scard(f"{STATS_PREFIX}users:{_today()}")
            total, success, failure, commands, unique_users = await pipeline.execute()
        except Exception as exc:
            raise RedisConnectionError("Falha ao ler analytics no Redis") from exc

        return {
            "total_commands": int(total or 0),
            "successful_commands": int(success or 0),
            "failed_commands": int(failure or 0),
            "unique_users": int(unique_users or 0),
            "command_breakdown": {
                _decode(name): int(count) for name, count in (commands or {}).items()
            },
        }
