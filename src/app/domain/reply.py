"""Resultados produzidos por handlers e por follow-ups."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.coordinators.discord.context import InteractionContext

# Recebe o contexto da fase de follow-up, não o do handler
Continuation = Callable[["InteractionContext"], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class InteractionReply:
    """Resposta síncrona de um handler e trabalho adiado opcional.

    A continuation é uma factory: o dispatcher só a invoca e registra
    depois que `response` já foi montado. Ela recebe o contexto com o
    budget na fase FOLLOWUP.
    """

    response: dict[str, Any]
    continuation: Continuation | None = None


@dataclass(frozen=True, slots=True)
class FollowUpResult:
    """Resultado de uma chamada de follow-up com checagem de deadline."""

    sent: bool
    deadline_exceeded: bool = False
    status_code: int | None = None
    error: str | None = None

    @classmethod
    def skipped(cls) -> FollowUpResult:
        return cls(sent=False, deadline_exceeded=True)


__all__ = ["Continuation", "FollowUpResult", "InteractionReply"]
