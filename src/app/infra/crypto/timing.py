"""Comparação de strings em tempo constante."""

from __future__ import annotations

import hashlib
import hmac


def timing_safe_equal(a: str, b: str) -> bool:
    """Compara duas strings sem vazar conteúdo ou tamanho por timing.

    Os dois lados são codificados em UTF-8 e reduzidos a digests de tamanho
    fixo antes do compare_digest, então tamanhos diferentes percorrem o
    mesmo caminho que tamanhos iguais.

    Args:
        a: Valor recebido
        b: Valor esperado

    Returns:
        True se idênticas byte a byte
    """
    a_digest = hashlib.sha256(a.encode("utf-8")).digest()
    b_digest = hashlib.sha256(b.encode("utf-8")).digest()
    return hmac.compare_digest(a_digest, b_digest)
