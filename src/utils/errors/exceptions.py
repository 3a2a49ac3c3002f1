"""Taxonomia de erros do gateway de interações.

Erros de autenticação e payload são terminais e viram status HTTP.
Os demais são capturados na fronteira do dispatcher e convertidos
em resposta de interação (200) com mensagem visível ao usuário.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base para erros do gateway de interações."""


class AuthenticationError(GatewayError):
    """Assinatura, headers ou secret inválidos (sempre 401)."""


class MalformedPayloadError(GatewayError):
    """JSON inválido ou tipo de interação desconhecido (sempre 400)."""


class UnknownInteractionTypeError(MalformedPayloadError):
    """Campo `type` fora do conjunto de interações conhecidas."""

    def __init__(self, interaction_type: object) -> None:
        super().__init__(f"Unknown interaction type: {interaction_type}")
        self.interaction_type = interaction_type


class HandlerNotFoundError(GatewayError):
    """Comando, componente ou modal sem handler registrado.

    Attributes:
        kind: command | component | modal
        identifier: Nome do comando ou custom_id
        user_message: Texto efêmero mostrado ao usuário
    """

    def __init__(self, kind: str, identifier: str, user_message: str) -> None:
        super().__init__(f"{kind}_not_found")
        self.kind = kind
        self.identifier = identifier
        self.user_message = user_message


class DeadlineExceededError(GatewayError):
    """Sinal interno: janela de resposta expirou antes da chamada de rede."""

    def __init__(self, operation: str, elapsed_ms: float) -> None:
        super().__init__(f"deadline_exceeded: {operation}")
        self.operation = operation
        self.elapsed_ms = elapsed_ms


class CollaboratorFailureError(GatewayError):
    """Falha de dependência externa (rate limiter, analytics, locale, preset API)."""

    def __init__(self, collaborator: str, message: str = "collaborator_failed") -> None:
        super().__init__(message)
        self.collaborator = collaborator


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""
