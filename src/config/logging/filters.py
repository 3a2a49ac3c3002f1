"""Filters de logging para injeção de contexto e mascaramento.

- CorrelationIdFilter: injeta correlation_id e service em cada record.
- SensitiveFieldFilter: mascara campos `extra` que carregam credenciais
  (token de interação, bot token, secrets, assinatura).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Nomes de atributos `extra` tratados como sensíveis
SENSITIVE_FIELDS = frozenset(
    {
        "token",
        "interaction_token",
        "bot_token",
        "authorization",
        "secret",
        "signature",
        "public_key",
    }
)

MASK = "***"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Se o chamador já passou correlation_id via `extra`, o valor é preservado
    (continuations rodam fora do ContextVar da requisição original).
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Mascara atributos sensíveis passados via `extra`.

    Não filtra records; apenas substitui o valor por MASK.
    """

    def __init__(self, fields: frozenset[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for name in self._fields:
            if getattr(record, name, None):
                setattr(record, name, MASK)
        return True
