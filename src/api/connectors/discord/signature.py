"""Verificação de requests de interação (tamanho, headers, Ed25519).

O RequestGuard recebe a chave pública no construtor e opera apenas
sobre o corpo bruto: nenhuma leitura de env e nenhum parse de JSON
acontecem antes da assinatura ser aceita.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.infra.crypto import SignatureCryptoError, load_public_key, verify_ed25519
from config.settings.discord import DEFAULT_MAX_BODY_BYTES

if TYPE_CHECKING:
    from collections.abc import Mapping

    from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-signature-ed25519"
TIMESTAMP_HEADER = "x-signature-timestamp"

ERROR_BODY_TOO_LARGE = "Request body too large"
ERROR_MISSING_HEADERS = "Missing signature headers"
ERROR_INVALID_SIGNATURE = "Invalid signature"


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Resultado da verificação de um request.

    Attributes:
        is_valid: True se o request pode seguir para o parse
        body: Corpo decodificado (vazio quando rejeitado antes da leitura)
        error: Motivo da rejeição
    """

    is_valid: bool
    body: str = ""
    error: str | None = None


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


class RequestGuard:
    """Autentica requests do endpoint de interações.

    Args:
        public_key_hex: Chave pública Ed25519 da aplicação (hex)
        max_body_bytes: Teto do corpo aceito
    """

    def __init__(self, public_key_hex: str, max_body_bytes: int = DEFAULT_MAX_BODY_BYTES) -> None:
        if max_body_bytes <= 0:
            raise ValueError("max_body_bytes deve ser > 0")
        self._max_body_bytes = max_body_bytes
        self._public_key: Ed25519PublicKey | None = None
        self._key_error: str | None = None
        try:
            self._public_key = load_public_key(public_key_hex)
        except SignatureCryptoError as exc:
            self._key_error = str(exc)
            logger.error("interaction_public_key_invalid", extra={"reason": str(exc)})

    @property
    def max_body_bytes(self) -> int:
        return self._max_body_bytes

    def exceeds_declared_length(self, headers: Mapping[str, str]) -> bool:
        """True se o Content-Length declarado passa do teto.

        Content-Length não numérico é ignorado; o tamanho real é
        verificado depois em `verify`.
        """
        declared = _header(headers, "content-length")
        if declared is None:
            return False
        try:
            return int(declared) > self._max_body_bytes
        except ValueError:
            return False

    def verify(self, headers: Mapping[str, str], body: bytes) -> VerificationResult:
        """Verifica tamanho, presença de headers e assinatura, nessa ordem."""
        if self.exceeds_declared_length(headers) or len(body) > self._max_body_bytes:
            return VerificationResult(is_valid=False, error=ERROR_BODY_TOO_LARGE)

        signature = _header(headers, SIGNATURE_HEADER)
        timestamp = _header(headers, TIMESTAMP_HEADER)
        if not signature or not timestamp:
            return VerificationResult(is_valid=False, error=ERROR_MISSING_HEADERS)

        try:
            if self._public_key is None:
                raise SignatureCryptoError(self._key_error or "public_key_unavailable")
            valid = verify_ed25519(self._public_key, timestamp.encode() + body, signature)
        except Exception as exc:
            return VerificationResult(is_valid=False, error=f"Verification failed: {exc}")

        if not valid:
            return VerificationResult(is_valid=False, error=ERROR_INVALID_SIGNATURE)

        return VerificationResult(is_valid=True, body=body.decode("utf-8", errors="replace"))


__all__ = [
    "ERROR_BODY_TOO_LARGE",
    "ERROR_INVALID_SIGNATURE",
    "ERROR_MISSING_HEADERS",
    "RequestGuard",
    "VerificationResult",
]
