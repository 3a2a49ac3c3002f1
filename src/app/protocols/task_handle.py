"""Protocolo do agendador de continuations.

`extend` é a única forma de manter trabalho vivo depois que o ACK
síncrono foi devolvido. O dispatcher só chama `extend` após montar
a resposta.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Protocol


class TaskHandleProtocol(Protocol):
    """Mantém uma awaitable executando além do ciclo do request."""

    def extend(self, awaitable: Awaitable[None], *, name: str | None = None) -> None:
        """Registra trabalho em background.

        Args:
            awaitable: Corrotina a executar
            name: Rótulo usado em logs de falha
        """
