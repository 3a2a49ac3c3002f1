"""Protocolo de analytics de comandos."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class AnalyticsStoreProtocol(ABC):
    """Contadores de uso por comando."""

    @abstractmethod
    async def track_command(
        self,
        command: str,
        user_id: str | None,
        *,
        success: bool,
        guild_id: str | None = None,
    ) -> None:
        """Registra uma execução de comando."""

    @abstractmethod
    async def get_stats(self) -> dict[str, Any]:
        """Totais agregados.

        Returns:
            Dict com `total_commands`, `successful_commands`,
            `failed_commands`, `unique_users` e `command_breakdown`.
        """
