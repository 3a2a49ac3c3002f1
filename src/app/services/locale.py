"""Resolução do locale de uma interação.

Ordem: preferência salva do usuário, locale enviado pelo Discord e,
por fim, o locale padrão. Falhas do store de preferências degradam
para os passos seguintes.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from config.logging import log_fallback

if TYPE_CHECKING:
    from app.protocols.locale import LanguagePreferenceStoreProtocol

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES: frozenset[str] = frozenset({"en", "ja", "de", "fr", "ko", "zh"})

# Variantes regionais do Discord mapeadas para os locales suportados
DISCORD_LOCALE_MAP: dict[str, str] = {
    "en-US": "en",
    "en-GB": "en",
    "ja": "ja",
    "de": "de",
    "fr": "fr",
    "ko": "ko",
    "zh-CN": "zh",
    "zh-TW": "zh",
}


def discord_locale_to_supported(discord_locale: str | None) -> str | None:
    """Mapeia o locale do Discord para um locale suportado, se houver."""
    if not discord_locale:
        return None
    return DISCORD_LOCALE_MAP.get(discord_locale)


class LocaleResolver:
    """Resolve o locale efetivo para um usuário."""

    def __init__(
        self,
        preference_store: LanguagePreferenceStoreProtocol | None = None,
        default_locale: str = DEFAULT_LOCALE,
    ) -> None:
        self._store = preference_store
        self._default = default_locale

    async def resolve(self, user_id: str | None, discord_locale: str | None) -> str:
        if self._store is not None and user_id:
            started = time.perf_counter()
            try:
                preferred = await self._store.get_language(user_id)
            except Exception:
                log_fallback(
                    logger,
                    "locale_preference_store",
                    reason="store_error",
                    elapsed_ms=(time.perf_counter() - started) * 1000,
                )
                preferred = None
            if preferred in SUPPORTED_LOCALES:
                return preferred

        return discord_locale_to_supported(discord_locale) or self._default


__all__ = [
    "DEFAULT_LOCALE",
    "DISCORD_LOCALE_MAP",
    "SUPPORTED_LOCALES",
    "LocaleResolver",
    "discord_locale_to_supported",
]
