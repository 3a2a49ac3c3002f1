"""Endpoint de interações do Discord.

Endpoint:
- POST /: recebe interações assinadas (Ed25519)

Fluxo:
1. Content-Length declarado acima do teto → 401 antes de ler o corpo
2. RequestGuard: tamanho, headers, assinatura → 401
3. Parse do envelope → 400 (JSON inválido ou tipo desconhecido)
4. Budget iniciado na aceitação, dispatcher produz o corpo da resposta
5. Continuations seguem no TaskHandle depois do 200
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.discord.signature import ERROR_BODY_TOO_LARGE
from api.connectors.discord.webhook.receive import parse_interaction_request
from app.bootstrap.dependencies import get_budget_factory, get_dispatcher, get_request_guard
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from utils.errors import AuthenticationError, MalformedPayloadError

logger = logging.getLogger(__name__)

router = APIRouter()

REQUEST_ID_HEADER = "X-Request-ID"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        content={"error": message},
        status_code=status_code,
        headers={REQUEST_ID_HEADER: get_correlation_id()},
    )


@router.post("/", response_model=None)
async def receive_interaction(request: Request) -> JSONResponse:
    """Recebe uma interação, responde dentro do prazo de ACK.

    Returns:
        Corpo de callback da interação (200) ou erro JSON (401/400).
    """
    correlation_id = request.headers.get("x-correlation-id") or request.headers.get(
        "x-request-id"
    )
    token = set_correlation_id(correlation_id)

    try:
        guard = get_request_guard()
        headers = dict(request.headers)

        if guard.exceeds_declared_length(headers):
            logger.warning(
                "interaction_rejected",
                extra={"channel": "discord", "reason": ERROR_BODY_TOO_LARGE},
            )
            return _error_response(status.HTTP_401_UNAUTHORIZED, ERROR_BODY_TOO_LARGE)

        raw_body = await request.body()

        try:
            envelope, _result = parse_interaction_request(raw_body, headers, guard)
        except AuthenticationError as exc:
            logger.warning(
                "interaction_rejected",
                extra={"channel": "discord", "reason": str(exc)},
            )
            return _error_response(status.HTTP_401_UNAUTHORIZED, str(exc))
        except MalformedPayloadError as exc:
            logger.warning(
                "interaction_malformed",
                extra={"channel": "discord", "error_type": type(exc).__name__},
            )
            return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

        # Sem correlation_id do cliente, usa o próprio interaction id
        if not correlation_id:
            reset_correlation_id(token)
            token = set_correlation_id(envelope.id)

        budget = get_budget_factory().start()
        body = await get_dispatcher().dispatch(envelope, budget, get_correlation_id())

        logger.info(
            "interaction_acknowledged",
            extra={
                "channel": "discord",
                "interaction_type": int(envelope.type),
                "response_type": body.get("type"),
                "elapsed_ms": round(budget.elapsed_ms, 2),
            },
        )
        return JSONResponse(content=body, headers={REQUEST_ID_HEADER: get_correlation_id()})

    finally:
        reset_correlation_id(token)
