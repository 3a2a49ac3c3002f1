"""Webhook interno de submissões de presets.

Endpoint:
- POST /webhooks/preset-submission

Segurança:
- `Authorization: Bearer <INTERNAL_WEBHOOK_SECRET>` comparado em tempo
  constante; secret ausente rejeita tudo (401)
- Corpo validado contra o conjunto fechado de payloads (400)
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.bootstrap.dependencies import get_handler_services, get_webhook_authenticator
from app.coordinators.discord.preset_notifications import notify_preset_submission
from app.domain.preset import PresetNotificationPayload
from app.observability import reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/preset-submission", response_model=None)
async def receive_preset_submission(request: Request) -> JSONResponse | dict[str, Any]:
    """Recebe um preset submetido e publica no canal correspondente."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))

    try:
        authenticator = get_webhook_authenticator()
        if not authenticator.authenticate(request.headers.get("authorization")):
            logger.warning("preset_webhook_unauthorized", extra={"channel": "internal"})
            return JSONResponse(
                content={"error": "Unauthorized"},
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        raw_body = await request.body()
        try:
            data = json.loads(raw_body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return JSONResponse(
                content={"error": "Invalid JSON body"},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        try:
            payload = PresetNotificationPayload.model_validate(data)
        except ValidationError as exc:
            logger.warning(
                "preset_webhook_invalid_payload",
                extra={"channel": "internal", "error_count": exc.error_count()},
            )
            return JSONResponse(
                content={"error": "Invalid payload"},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        await notify_preset_submission(payload, get_handler_services())
        return {"success": True}

    finally:
        reset_correlation_id(token)
