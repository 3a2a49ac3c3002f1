"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationError,
    CollaboratorFailureError,
    DeadlineExceededError,
    GatewayError,
    HandlerNotFoundError,
    InfrastructureError,
    MalformedPayloadError,
    RedisConnectionError,
    UnknownInteractionTypeError,
)

__all__ = [
    "AuthenticationError",
    "CollaboratorFailureError",
    "DeadlineExceededError",
    "GatewayError",
    "HandlerNotFoundError",
    "InfrastructureError",
    "MalformedPayloadError",
    "RedisConnectionError",
    "UnknownInteractionTypeError",
]
