"""TaskHandle que guarda awaitables para execução explícita no teste."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any


class RecordingTaskHandle:
    """Registra `extend` sem agendar nada; `run_all` executa em ordem."""

    def __init__(self) -> None:
        self.scheduled: list[tuple[str | None, Awaitable[Any]]] = []

    @property
    def names(self) -> list[str | None]:
        return [name for name, _ in self.scheduled]

    def extend(self, awaitable: Awaitable[Any], *, name: str | None = None) -> None:
        self.scheduled.append((name, awaitable))

    async def run_all(self) -> None:
        pending, self.scheduled = self.scheduled, []
        for _, awaitable in pending:
            await awaitable

    def close(self) -> None:
        """Fecha corrotinas não executadas (evita RuntimeWarning)."""
        for _, awaitable in self.scheduled:
            close = getattr(awaitable, "close", None)
            if callable(close):
                close()
        self.scheduled = []
