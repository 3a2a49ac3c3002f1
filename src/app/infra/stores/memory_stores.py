"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios
e sem compartilhamento entre instâncias.
"""

from __future__ import annotations

import time
from collections import Counter
from collections.abc import Callable
from typing import Any

from app.domain.rate_limit import (
    RATE_LIMIT_WINDOW_SECONDS,
    RateLimitDecision,
    limit_for_command,
)
from app.protocols.analytics import AnalyticsStoreProtocol
from app.protocols.locale import LanguagePreferenceStoreProtocol
from app.protocols.rate_limiter import RateLimiterProtocol


class MemoryRateLimiter(RateLimiterProtocol):
    """Rate limiter de janela fixa em memória — apenas para dev/test."""

    def __init__(
        self,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[int, float]] = {}  # key -> (count, expires_at)

    async def check(self, user_id: str, command: str) -> RateLimitDecision:
        limit = limit_for_command(command)
        key = f"{user_id}:{command}"
        now = self._clock()
        count, expires_at = self._windows.get(key, (0, now + self._window_seconds))
        if now >= expires_at:
            count, expires_at = 0, now + self._window_seconds
        count += 1
        self._windows[key] = (count, expires_at)

        if count > limit:
            return RateLimitDecision(
                allowed=False,
                retry_after_seconds=max(1, int(expires_at - now)),
                limit=limit,
                remaining=0,
            )
        return RateLimitDecision(allowed=True, limit=limit, remaining=limit - count)


class MemoryAnalyticsStore(AnalyticsStoreProtocol):
    """Contadores de comandos em memória — apenas para dev/test."""

    def __init__(self) -> None:
        self._commands: Counter[str] = Counter()
        self._success = 0
        self._failure = 0
        self._users: set[str] = set()

    async def track_command(
        self,
        command: str,
        user_id: str | None,
        *,
        success: bool,
        guild_id: str | None = None,
    ) -> None:
        self._commands[command] += 1
        if success:
            self._success += 1
        else:
            self._failure += 1
        if user_id:
            self._users.add(user_id)

    async def get_stats(self) -> dict[str, Any]:
        return {
            "total_commands": self._success + self._failure,
            "successful_commands": self._success,
            "failed_commands": self._failure,
            "unique_users": len(self._users),
            "command_breakdown": dict(self._commands),
        }


class MemoryLanguagePreferenceStore(LanguagePreferenceStoreProtocol):
    """Preferências de idioma em memória — apenas para dev/test."""

    def __init__(self, preferences: dict[str, str] | None = None) -> None:
        self._preferences = dict(preferences or {})

    def set_language(self, user_id: str, locale: str) -> None:
        self._preferences[user_id] = locale

    async def get_language(self, user_id: str) -> str | None:
        return self._preferences.get(user_id)
