"""Orçamento de tempo de uma interação.

A plataforma exige o ACK síncrono em até 3s e aceita follow-ups pelo
token da interação por 15 minutos. Um DeadlineBudget nasce quando o
envelope é aceito e nunca é reiniciado. A continuation em background
recebe uma cópia na fase FOLLOWUP, com o mesmo instante de início.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum

from config.settings.discord import DEFAULT_ACK_DEADLINE_MS, DEFAULT_FOLLOWUP_DEADLINE_MS

Clock = Callable[[], float]


class DeadlinePhase(str, Enum):
    """Janela contra a qual uma operação é verificada."""

    ACK = "ack"
    FOLLOWUP = "followup"


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class DeadlineBudget:
    """Orçamento monotônico (milissegundos) de uma interação.

    Attributes:
        ack_deadline_ms: Janela do ACK síncrono
        followup_deadline_ms: Validade do token de follow-up
        clock: Relógio monotônico em ms (injetável em testes)
        start_time: Instante de criação segundo `clock`
        phase: Janela ativa; `remaining_ms` e `is_exceeded` medem contra ela
    """

    ack_deadline_ms: int = DEFAULT_ACK_DEADLINE_MS
    followup_deadline_ms: int = DEFAULT_FOLLOWUP_DEADLINE_MS
    clock: Clock = field(default=_monotonic_ms, repr=False, compare=False)
    start_time: float = field(default=-1.0)
    phase: DeadlinePhase = DeadlinePhase.ACK

    def __post_init__(self) -> None:
        if self.ack_deadline_ms <= 0:
            raise ValueError("ack_deadline_ms deve ser > 0")
        if self.followup_deadline_ms <= 0:
            raise ValueError("followup_deadline_ms deve ser > 0")
        if self.start_time < 0:
            object.__setattr__(self, "start_time", self.clock())

    @property
    def elapsed_ms(self) -> float:
        return max(0.0, self.clock() - self.start_time)

    @property
    def window_ms(self) -> int:
        return self.window_for(self.phase)

    @property
    def remaining_ms(self) -> float:
        return max(0.0, self.window_ms - self.elapsed_ms)

    @property
    def is_exceeded(self) -> bool:
        return self.remaining_ms == 0

    @property
    def followup_remaining_ms(self) -> float:
        return max(0.0, self.followup_deadline_ms - self.elapsed_ms)

    @property
    def is_followup_exceeded(self) -> bool:
        return self.followup_remaining_ms == 0

    def window_for(self, phase: DeadlinePhase) -> int:
        if phase is DeadlinePhase.ACK:
            return self.ack_deadline_ms
        return self.followup_deadline_ms

    def for_phase(self, phase: DeadlinePhase) -> DeadlineBudget:
        """Mesmo relógio e mesmo início, medindo contra outra janela."""
        return replace(self, phase=phase)


@dataclass(frozen=True)
class DeadlineBudgetFactory:
    """Cria budgets com as janelas configuradas no startup."""

    ack_deadline_ms: int = DEFAULT_ACK_DEADLINE_MS
    followup_deadline_ms: int = DEFAULT_FOLLOWUP_DEADLINE_MS
    clock: Clock = field(default=_monotonic_ms, repr=False)

    def start(self) -> DeadlineBudget:
        return DeadlineBudget(
            ack_deadline_ms=self.ack_deadline_ms,
            followup_deadline_ms=self.followup_deadline_ms,
            clock=self.clock,
        )


__all__ = ["Clock", "DeadlineBudget", "DeadlineBudgetFactory", "DeadlinePhase"]
