"""Recebimento de interações do Discord."""

from api.connectors.discord.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    UnknownInteractionTypeError,
    WebhookRequestError,
    parse_interaction_body,
    parse_interaction_request,
)

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "UnknownInteractionTypeError",
    "WebhookRequestError",
    "parse_interaction_body",
    "parse_interaction_request",
]
