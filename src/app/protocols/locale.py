"""Protocolos de preferência de idioma."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LanguagePreferenceStoreProtocol(ABC):
    """Idioma escolhido explicitamente pelo usuário."""

    @abstractmethod
    async def get_language(self, user_id: str) -> str | None:
        """Código de locale salvo ou None."""
