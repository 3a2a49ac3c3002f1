"""Criptografia do gateway de interações.

- ed25519: carga de chave pública e verificação de assinatura
- timing: comparação em tempo constante para secrets compartilhados
"""

from .constants import ED25519_PUBLIC_KEY_SIZE, ED25519_SIGNATURE_SIZE
from .ed25519 import load_public_key, verify_ed25519
from .errors import SignatureCryptoError
from .timing import timing_safe_equal

__all__ = [
    "ED25519_PUBLIC_KEY_SIZE",
    "ED25519_SIGNATURE_SIZE",
    "SignatureCryptoError",
    "load_public_key",
    "timing_safe_equal",
    "verify_ed25519",
]
