"""Protocolo de rate limiting consumido pelo dispatcher."""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.rate_limit import RateLimitDecision


class RateLimiterProtocol(ABC):
    """Contrato assíncrono de rate limit por (usuário, comando)."""

    @abstractmethod
    async def check(self, user_id: str, command: str) -> RateLimitDecision:
        """Consome uma invocação e devolve a decisão.

        Implementações podem levantar em falha de backend; o dispatcher
        trata isso como fail-open.
        """
