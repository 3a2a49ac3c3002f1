"""Parse e validação inicial das interações (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import ValidationError

from app.domain.interaction import KNOWN_INTERACTION_TYPES, build_envelope
from utils.errors import AuthenticationError, MalformedPayloadError, UnknownInteractionTypeError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from api.connectors.discord.signature import RequestGuard, VerificationResult
    from app.domain.interaction import InteractionEnvelope


class WebhookRequestError(ValueError):
    """Erro base para falhas de request de interação."""


class InvalidSignatureError(WebhookRequestError, AuthenticationError):
    """Request rejeitado pelo RequestGuard (401)."""


class InvalidJsonError(WebhookRequestError, MalformedPayloadError):
    """JSON inválido ou envelope fora do formato (400)."""


def parse_interaction_body(raw_body: bytes) -> InteractionEnvelope:
    """Parseia o corpo já autenticado no envelope tipado.

    Raises:
        InvalidJsonError: JSON inválido, não-objeto ou envelope inválido
        UnknownInteractionTypeError: `type` fora do conjunto conhecido
    """
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("Invalid JSON body") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    interaction_type = payload.get("type")
    if (
        isinstance(interaction_type, bool)
        or not isinstance(interaction_type, int)
        or interaction_type not in KNOWN_INTERACTION_TYPES
    ):
        raise UnknownInteractionTypeError(interaction_type)

    try:
        return build_envelope(payload)
    except ValidationError as exc:
        raise InvalidJsonError("invalid_interaction_payload") from exc


def parse_interaction_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    guard: RequestGuard,
) -> tuple[InteractionEnvelope, VerificationResult]:
    """Autentica e parseia um request de interação.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        guard: RequestGuard configurado com a chave pública

    Raises:
        InvalidSignatureError: Se o guard rejeitar o request
        InvalidJsonError: Se o JSON estiver inválido
        UnknownInteractionTypeError: Se o tipo não for reconhecido

    Returns:
        (envelope, VerificationResult)
    """
    result = guard.verify(headers, raw_body)
    if not result.is_valid:
        raise InvalidSignatureError(result.error or "Invalid signature")

    return parse_interaction_body(raw_body), result


__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "UnknownInteractionTypeError",
    "WebhookRequestError",
    "parse_interaction_body",
    "parse_interaction_request",
]
