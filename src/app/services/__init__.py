"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.locale import DEFAULT_LOCALE, LocaleResolver

__all__ = [
    "DEFAULT_LOCALE",
    "LocaleResolver",
]
