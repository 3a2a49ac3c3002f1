"""Protocolo da API externa de presets."""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.preset import PresetStatus, PresetSummary


class PresetApiProtocol(ABC):
    """Operações da API de presets usadas pelos handlers.

    Falhas de transporte ou status de erro são levantadas como
    `CollaboratorFailureError`.
    """

    @abstractmethod
    async def search_presets(
        self,
        query: str,
        *,
        status: PresetStatus = PresetStatus.APPROVED,
        limit: int = 25,
    ) -> list[PresetSummary]:
        """Busca presets por nome/descrição."""

    @abstractmethod
    async def list_user_presets(self, user_id: str, query: str = "") -> list[PresetSummary]:
        """Presets submetidos pelo usuário."""

    @abstractmethod
    async def update_status(
        self,
        preset_id: str,
        status: PresetStatus,
        moderator_id: str,
        reason: str | None = None,
    ) -> PresetSummary:
        """Altera o status de moderação de um preset."""
