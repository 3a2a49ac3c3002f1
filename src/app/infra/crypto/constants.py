"""Constantes criptográficas do gateway."""

ED25519_PUBLIC_KEY_SIZE = 32  # bytes
ED25519_SIGNATURE_SIZE = 64  # bytes
