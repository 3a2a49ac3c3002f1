"""Preferência de idioma do usuário em Redis (somente leitura)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.locale import LanguagePreferenceStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

LANGUAGE_PREFIX = "i18n:user:"


class RedisLanguagePreferenceStore(LanguagePreferenceStoreProtocol):
    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._redis = async_redis_client

    async def get_language(self, user_id: str) -> str | None:
        try:
            value = await self._redis.get(f"{LANGUAGE_PREFIX}{user_id}")
        except Exception as exc:
            raise RedisConnectionError("Falha ao ler idioma no Redis") from exc
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes) else str(value)
