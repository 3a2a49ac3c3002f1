"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - redis_rate_limiter: Rate limit por usuário/comando em Redis
    - redis_analytics_store: Contadores de uso de comandos em Redis
    - redis_language_store: Preferência de idioma em Redis
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import (
    MemoryAnalyticsStore,
    MemoryLanguagePreferenceStore,
    MemoryRateLimiter,
)
from app.infra.stores.redis_analytics_store import RedisAnalyticsStore
from app.infra.stores.redis_language_store import RedisLanguagePreferenceStore
from app.infra.stores.redis_rate_limiter import RedisRateLimiter

__all__ = [
    # Memory (dev/test)
    "MemoryAnalyticsStore",
    "MemoryLanguagePreferenceStore",
    "MemoryRateLimiter",
    # Redis
    "RedisAnalyticsStore",
    "RedisLanguagePreferenceStore",
    "RedisRateLimiter",
]
