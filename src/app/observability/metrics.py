"""Registro de métricas via structured logging.

As métricas saem como logs estruturados e são agregadas fora do processo.

Métricas suportadas:
- Latência: tempo de dispatch por tipo de interação
- Interação: contador por tipo/rota/resultado
- Deadline: chamadas de follow-up puladas por janela expirada
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "dispatcher")
        operation: Nome da operação (ex: "application_command")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_interaction(
    interaction_type: str,
    route: str,
    outcome: str,
    correlation_id: str | None = None,
) -> None:
    """Registra uma interação despachada.

    Args:
        interaction_type: Nome do tipo (ex: "APPLICATION_COMMAND")
        route: Comando, prefixo ou chave de autocomplete resolvida
        outcome: handled | deferred | rate_limited | not_found | failed
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_interaction",
        extra={
            "metric_type": "interaction",
            "interaction_type": interaction_type,
            "route": route,
            "outcome": outcome,
            "correlation_id": correlation_id,
        },
    )


def record_deadline_exceeded(
    operation: str,
    elapsed_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra chamada de rede pulada por deadline expirado."""
    logger.warning(
        "metric_deadline_exceeded",
        extra={
            "metric_type": "deadline_exceeded",
            "operation": operation,
            "elapsed_ms": round(elapsed_ms, 2),
            "correlation_id": correlation_id,
        },
    )
