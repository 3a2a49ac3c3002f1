"""Verificação de assinaturas Ed25519 das interações do Discord."""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from .constants import ED25519_PUBLIC_KEY_SIZE, ED25519_SIGNATURE_SIZE
from .errors import SignatureCryptoError


def load_public_key(public_key_hex: str) -> Ed25519PublicKey:
    """Carrega chave pública Ed25519 a partir do hex da aplicação.

    Args:
        public_key_hex: Chave pública (64 caracteres hex)

    Returns:
        Objeto Ed25519PublicKey

    Raises:
        SignatureCryptoError: Se o hex for inválido ou o tamanho errado
    """
    try:
        raw = bytes.fromhex(public_key_hex.strip())
    except ValueError as exc:
        raise SignatureCryptoError("invalid_public_key_hex") from exc

    if len(raw) != ED25519_PUBLIC_KEY_SIZE:
        raise SignatureCryptoError("invalid_public_key_size")

    try:
        return Ed25519PublicKey.from_public_bytes(raw)
    except ValueError as exc:
        raise SignatureCryptoError("invalid_public_key") from exc


def verify_ed25519(
    public_key: Ed25519PublicKey,
    message: bytes,
    signature_hex: str,
) -> bool:
    """Verifica assinatura Ed25519 sobre a mensagem.

    Args:
        public_key: Chave pública carregada
        message: Bytes assinados (timestamp + corpo bruto)
        signature_hex: Header X-Signature-Ed25519

    Returns:
        True se a assinatura confere, False caso contrário

    Raises:
        SignatureCryptoError: Se a assinatura não for hex válido
    """
    try:
        signature = bytes.fromhex(signature_hex.strip())
    except ValueError as exc:
        raise SignatureCryptoError("invalid_signature_hex") from exc

    if len(signature) != ED25519_SIGNATURE_SIZE:
        return False

    try:
        public_key.verify(signature, message)
    except InvalidSignature:
        return False
    return True
