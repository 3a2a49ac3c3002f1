"""Rate limiter por (usuário, comando) em Redis.

Janela fixa: INCR no contador da janela e EXPIRE NX na primeira
invocação. O TTL restante vira o `retry_after_seconds` da negação.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.rate_limit import (
    RATE_LIMIT_WINDOW_SECONDS,
    RateLimitDecision,
    limit_for_command,
)
from app.protocols.rate_limiter import RateLimiterProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

RATE_LIMIT_PREFIX = "ratelimit:user:"


class RedisRateLimiter(RateLimiterProtocol):
    """Rate limiter usando Redis assíncrono.

    Args:
        async_redis_client: Cliente Redis assíncrono
        window_seconds: Tamanho da janela
    """

    def __init__(
        self,
        async_redis_client: AsyncRedis[bytes],
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
    ) -> None:
        self._redis = async_redis_client
        self._window_seconds = window_seconds

    def _key(self, user_id: str, command: str) -> str:
        return f"{RATE_LIMIT_PREFIX}{user_id}:{command}"

    async def check(self, user_id: str, command: str) -> RateLimitDecision:
        limit = limit_for_command(command)
        key = self._key(user_id, command)
        try:
            pipeline = self._redis.pipeline()
            pipeline.incr(key)
            pipeline.expire(key, self._window_seconds, nx=True)
            pipeline.ttl(key)
            count, _, ttl = await pipeline.execute()
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar rate limit no Redis") from exc

        count = int(count)
        if count > limit:
            retry_after = int(ttl) if ttl and int(ttl) > 0 else self._window_seconds
            logger.debug(
                "rate_limit_denied",
                extra={"command": command, "limit": limit, "retry_after": retry_after},
            )
            return RateLimitDecision(
                allowed=False,
                retry_after_seconds=retry_after,
                limit=limit,
                remaining=0,
            )
        return RateLimitDecision(allowed=True, limit=limit, remaining=limit - count)
