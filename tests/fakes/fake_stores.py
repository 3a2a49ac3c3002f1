"""Rate limiters e stores de analytics com comportamento fixo."""

from __future__ import annotations

from typing import Any

from app.domain.rate_limit import RateLimitDecision, limit_for_command
from app.protocols.analytics import AnalyticsStoreProtocol
from app.protocols.rate_limiter import RateLimiterProtocol
from utils.errors import RedisConnectionError


class DenyingRateLimiter(RateLimiterProtocol):
    def __init__(self, retry_after_seconds: int = 42) -> None:
        self.retry_after_seconds = retry_after_seconds
        self.checks: list[tuple[str, str]] = []

    async def check(self, user_id: str, command: str) -> RateLimitDecision:
        self.checks.append((user_id, command))
        return RateLimitDecision(
            allowed=False,
            retry_after_seconds=self.retry_after_seconds,
            limit=limit_for_command(command),
            remaining=0,
        )


class FailingRateLimiter(RateLimiterProtocol):
    async def check(self, user_id: str, command: str) -> RateLimitDecision:
        raise RedisConnectionError("redis down")


class FailingAnalyticsStore(AnalyticsStoreProtocol):
    def __init__(self) -> None:
        self.attempts = 0

    async def track_command(
        self,
        command: str,
        user_id: str | None,
        *,
        success: bool,
        guild_id: str | None = None,
    ) -> None:
        self.attempts += 1
        raise RedisConnectionError("redis down")

    async def get_stats(self) -> dict[str, Any]:
        raise RedisConnectionError("redis down")
