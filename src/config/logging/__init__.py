"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    # No bootstrap
    configure_logging(level="INFO", service_name="dyebot_gateway")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("interaction_dispatched", extra={"interaction_type": 2})

Todo log sai em JSON com correlation_id e service. Tokens de interação,
secrets e headers de assinatura nunca aparecem (ver SensitiveFieldFilter).
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter, SensitiveFieldFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SensitiveFieldFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
