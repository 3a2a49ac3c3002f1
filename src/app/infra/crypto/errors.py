"""Erros de criptografia do gateway.

Definido em app/infra para manter boundaries corretas; a camada api
converte em VerificationResult sem propagar exceção.
"""


class SignatureCryptoError(Exception):
    """Erro no primitivo de verificação (hex inválido, chave malformada)."""
