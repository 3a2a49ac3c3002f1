"""Settings dos backends de estado externo (rate limit e analytics).

O gateway não guarda estado próprio; contadores vivem em Redis
ou, em desenvolvimento, em memória do processo.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

StoreBackend = Literal["memory", "redis"]

_VALID_BACKENDS = frozenset({"memory", "redis"})


@dataclass(frozen=True)
class StoreSettings:
    """Configurações dos stores de contadores.

    Attributes:
        rate_limit_backend: Backend do rate limiter (memory|redis)
        analytics_backend: Backend dos contadores de analytics (memory|redis)
        rate_limit_window_seconds: Janela do rate limit por usuário/comando
    """

    rate_limit_backend: StoreBackend = "memory"
    analytics_backend: StoreBackend = "memory"
    rate_limit_window_seconds: int = 60

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida backends contra o ambiente.

        Args:
            base: BaseSettings para verificar ambiente e REDIS_URL.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        for name, backend in (
            ("RATE_LIMIT_BACKEND", self.rate_limit_backend),
            ("ANALYTICS_BACKEND", self.analytics_backend),
        ):
            if backend not in _VALID_BACKENDS:
                errors.append(f"{name} inválido: {backend}")
                continue
            if backend == "memory" and not base.is_development:
                errors.append(
                    f"{name}=memory proibido em staging/production. Use Redis."
                )
            if backend == "redis" and not base.redis_url:
                errors.append(f"{name}=redis requer REDIS_URL configurado")

        if self.rate_limit_window_seconds <= 0:
            errors.append("RATE_LIMIT_WINDOW_SECONDS deve ser > 0")

        return errors


def _load_stores_from_env() -> StoreSettings:
    """Carrega StoreSettings de variáveis de ambiente."""
    return StoreSettings(
        rate_limit_backend=os.getenv("RATE_LIMIT_BACKEND", "memory").lower(),  # type: ignore[arg-type]
        analytics_backend=os.getenv("ANALYTICS_BACKEND", "memory").lower(),  # type: ignore[arg-type]
        rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
    )


@lru_cache(maxsize=1)
def get_store_settings() -> StoreSettings:
    """Retorna instância cacheada de StoreSettings."""
    return _load_stores_from_env()
