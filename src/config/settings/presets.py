"""Settings da API externa de presets da comunidade."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class PresetApiSettings:
    """Configuração do cliente da API de presets.

    Attributes:
        api_url: URL base (ex.: https://presets.example.com)
        api_secret: Secret enviado como Bearer
        request_timeout_seconds: Timeout por requisição
        max_retries: Tentativas extras em 429/5xx
    """

    api_url: str = ""
    api_secret: str = ""
    request_timeout_seconds: float = 5.0
    max_retries: int = 1

    @property
    def enabled(self) -> bool:
        return bool(self.api_url and self.api_secret)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.api_url and not self.api_url.startswith(("http://", "https://")):
            errors.append("PRESETS_API_URL deve começar com http:// ou https://")
        if self.api_url and not self.api_secret:
            errors.append("BOT_API_SECRET obrigatório quando PRESETS_API_URL está definido")
        if self.request_timeout_seconds <= 0:
            errors.append("PRESETS_API_TIMEOUT_SECONDS deve ser > 0")
        if self.max_retries < 0:
            errors.append("PRESETS_API_MAX_RETRIES deve ser >= 0")
        return errors


def _load_from_env() -> PresetApiSettings:
    return PresetApiSettings(
        api_url=os.getenv("PRESETS_API_URL", "").rstrip("/"),
        api_secret=os.getenv("BOT_API_SECRET", ""),
        request_timeout_seconds=float(os.getenv("PRESETS_API_TIMEOUT_SECONDS", "5")),
        max_retries=int(os.getenv("PRESETS_API_MAX_RETRIES", "1")),
    )


@lru_cache(maxsize=1)
def get_preset_api_settings() -> PresetApiSettings:
    """Retorna instância cacheada de PresetApiSettings."""
    return _load_from_env()
