"""Contexto entregue aos handlers de interação."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from app.domain.deadline import DeadlinePhase

if TYPE_CHECKING:
    from app.domain.deadline import DeadlineBudget
    from app.domain.interaction import InteractionEnvelope
    from app.protocols.analytics import AnalyticsStoreProtocol
    from app.protocols.discord_client import DiscordClientProtocol
    from app.protocols.preset_api import PresetApiProtocol


@dataclass(frozen=True)
class HandlerServices:
    """Colaboradores e configuração compartilhados pelos handlers.

    Montado uma vez no bootstrap; handlers nunca leem env vars.
    """

    discord_client: DiscordClientProtocol | None = None
    preset_api: PresetApiProtocol | None = None
    analytics: AnalyticsStoreProtocol | None = None
    moderator_ids: frozenset[str] = field(default_factory=frozenset)
    stats_authorized_users: frozenset[str] = field(default_factory=frozenset)
    moderation_channel_id: str = ""
    submission_log_channel_id: str = ""
    service_name: str = "dyebot-gateway"
    command_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class InteractionContext:
    """Uma interação aceita, pronta para o handler.

    Attributes:
        envelope: Envelope tipado (imutável)
        budget: Orçamento de tempo iniciado na aceitação
        locale: Locale resolvido
        correlation_id: ID de correlação do request
        services: Colaboradores compartilhados
    """

    envelope: InteractionEnvelope
    budget: DeadlineBudget
    locale: str
    correlation_id: str
    services: HandlerServices

    @property
    def user_id(self) -> str | None:
        return self.envelope.user_id

    @property
    def display_name(self) -> str:
        user = self.envelope.user
        return user.display_name if user else "Unknown"

    def for_followup(self) -> InteractionContext:
        """Contexto da continuation: budget medido contra a janela de follow-up."""
        return replace(self, budget=self.budget.for_phase(DeadlinePhase.FOLLOWUP))


__all__ = ["HandlerServices", "InteractionContext"]
