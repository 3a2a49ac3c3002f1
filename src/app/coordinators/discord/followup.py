"""Follow-ups condicionados ao orçamento de tempo da interação.

Antes de cada chamada de rede o budget é consultado; se a janela ativa
dele (`budget.is_exceeded`) já passou, a chamada não é feita e o
resultado registra `deadline_exceeded=True`. Continuations recebem o
budget na fase FOLLOWUP.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.reply import FollowUpResult
from app.observability import get_correlation_id, record_deadline_exceeded
from utils.errors import CollaboratorFailureError, DeadlineExceededError

if TYPE_CHECKING:
    from app.domain.deadline import DeadlineBudget
    from app.domain.interaction import InteractionEnvelope
    from app.protocols.discord_client import DiscordClientProtocol, FileAttachment

logger = logging.getLogger(__name__)


def _ensure_within_deadline(operation: str, budget: DeadlineBudget) -> None:
    if budget.is_exceeded:
        raise DeadlineExceededError(operation, budget.elapsed_ms)


def _skip(exc: DeadlineExceededError) -> FollowUpResult:
    record_deadline_exceeded(exc.operation, exc.elapsed_ms, get_correlation_id())
    return FollowUpResult.skipped()


def _result(operation: str, status_code: int) -> FollowUpResult:
    if 200 <= status_code < 300:
        return FollowUpResult(sent=True, status_code=status_code)
    logger.warning(
        "followup_rejected",
        extra={"operation": operation, "status_code": status_code},
    )
    return FollowUpResult(
        sent=False,
        status_code=status_code,
        error=f"http_status_{status_code}",
    )


async def send_followup_with_deadline(
    client: DiscordClientProtocol,
    envelope: InteractionEnvelope,
    budget: DeadlineBudget,
    payload: dict[str, Any],
    *,
    file: FileAttachment | None = None,
) -> FollowUpResult:
    """Envia nova mensagem pelo token da interação, se ainda houver tempo."""
    try:
        _ensure_within_deadline("send_followup", budget)
    except DeadlineExceededError as exc:
        return _skip(exc)
    try:
        status_code = await client.send_followup(
            envelope.application_id, envelope.token, payload, file
        )
    except CollaboratorFailureError as exc:
        logger.warning("followup_send_failed", extra={"error_type": type(exc).__name__})
        return FollowUpResult(sent=False, error=str(exc))
    return _result("send_followup", status_code)


async def edit_original_response_with_deadline(
    client: DiscordClientProtocol,
    envelope: InteractionEnvelope,
    budget: DeadlineBudget,
    payload: dict[str, Any],
    *,
    file: FileAttachment | None = None,
) -> FollowUpResult:
    """Edita a resposta original (@original), se ainda houver tempo."""
    try:
        _ensure_within_deadline("edit_original_response", budget)
    except DeadlineExceededError as exc:
        return _skip(exc)
    try:
        status_code = await client.edit_original_response(
            envelope.application_id, envelope.token, payload, file
        )
    except CollaboratorFailureError as exc:
        logger.warning("followup_edit_failed", extra={"error_type": type(exc).__name__})
        return FollowUpResult(sent=False, error=str(exc))
    return _result("edit_original_response", status_code)


__all__ = ["edit_original_response_with_deadline", "send_followup_with_deadline"]
