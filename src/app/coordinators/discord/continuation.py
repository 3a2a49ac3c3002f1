"""Execução de continuations registradas após o ACK."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.coordinators.discord.followup import edit_original_response_with_deadline
from app.domain.responses import error_embed

if TYPE_CHECKING:
    from app.coordinators.discord.context import InteractionContext
    from app.domain.reply import Continuation

logger = logging.getLogger(__name__)

GENERIC_FAILURE_EMBED = error_embed(
    "Error",
    "Something went wrong while processing your request. Please try again later.",
)


async def run_continuation(ctx: InteractionContext, work: Continuation) -> None:
    """Executa o trabalho adiado de uma interação.

    O trabalho recebe o contexto na fase FOLLOWUP: `budget.is_exceeded`
    passa a medir a validade do token, não a janela do ACK.

    Falha no trabalho vira uma edição best-effort da resposta original
    com mensagem genérica. Se nem essa edição puder ser enviada, a
    falha é registrada e descartada.
    """
    followup_ctx = ctx.for_followup()
    try:
        await work(followup_ctx)
    except Exception as exc:
        logger.exception(
            "continuation_failed",
            extra={
                "interaction_id": ctx.envelope.id,
                "error_type": type(exc).__name__,
                "correlation_id": ctx.correlation_id,
            },
        )
        try:
            await _report_failure(followup_ctx)
        except Exception:
            logger.exception(
                "continuation_failure_report_failed",
                extra={"correlation_id": ctx.correlation_id},
            )


async def _report_failure(ctx: InteractionContext) -> None:
    client = ctx.services.discord_client
    if client is None:
        logger.warning("continuation_failure_unreported", extra={"reason": "no_client"})
        return

    result = await edit_original_response_with_deadline(
        client,
        ctx.envelope,
        ctx.budget,
        {"content": "", "embeds": [GENERIC_FAILURE_EMBED]},
    )
    if not result.sent:
        logger.warning(
            "continuation_failure_unreported",
            extra={
                "deadline_exceeded": result.deadline_exceeded,
                "status_code": result.status_code,
                "correlation_id": ctx.correlation_id,
            },
        )


__all__ = ["GENERIC_FAILURE_EMBED", "run_continuation"]
