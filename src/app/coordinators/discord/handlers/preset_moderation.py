"""Moderação de presets pelo canal de moderação.

custom_id:
- preset_approve_{id}: aprova (ACK de update adiado + continuation)
- preset_reject_{id}: abre modal pedindo o motivo
- preset_reject_modal_{id}: submissão do motivo (update adiado + continuation)

As continuations editam a mensagem de moderação pelo endpoint de canal
(token do bot), já que ela não pertence à interação atual.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.preset import PresetStatus, status_color
from app.domain.reply import InteractionReply
from app.domain.responses import (
    deferred_update_response,
    ephemeral_response,
    error_embed,
    modal_response,
    text_input_row,
)
from utils.errors import CollaboratorFailureError

if TYPE_CHECKING:
    from app.coordinators.discord.context import InteractionContext
    from app.domain.interaction import ComponentInteraction, ModalSubmitInteraction
    from app.domain.preset import PresetSummary

logger = logging.getLogger(__name__)

APPROVE_PREFIX = "preset_approve_"
REJECT_PREFIX = "preset_reject_"
REJECT_MODAL_PREFIX = "preset_reject_modal_"
REJECTION_REASON_FIELD = "rejection_reason"
MIN_REASON_LENGTH = 10
MAX_REASON_LENGTH = 500


def _ephemeral_error(message: str) -> InteractionReply:
    return InteractionReply(
        ephemeral_response(data={"embeds": [error_embed("Error", message)]})
    )


def _is_moderator(ctx: InteractionContext) -> bool:
    return bool(ctx.user_id) and ctx.user_id in ctx.services.moderator_ids


def _original_embed(envelope: ComponentInteraction | ModalSubmitInteraction) -> dict[str, Any]:
    if envelope.message and envelope.message.embeds:
        return dict(envelope.message.embeds[0])
    return {}


async def _edit_moderation_message(
    ctx: InteractionContext,
    embed: dict[str, Any],
    *,
    remove_buttons: bool,
) -> None:
    envelope: ComponentInteraction | ModalSubmitInteraction = ctx.envelope  # type: ignore[assignment]
    client = ctx.services.discord_client
    channel_id = envelope.channel_id or (envelope.message.channel_id if envelope.message else None)
    if client is None or not channel_id or envelope.message is None:
        logger.warning("moderation_message_not_editable")
        return
    payload: dict[str, Any] = {"embeds": [embed]}
    if remove_buttons:
        payload["components"] = []
    await client.edit_channel_message(channel_id, envelope.message.id, payload)


async def _notify_log_channel(
    ctx: InteractionContext,
    preset: PresetSummary,
    verb: str,
    status: PresetStatus,
    reason: str | None = None,
) -> None:
    services = ctx.services
    if services.discord_client is None or not services.submission_log_channel_id:
        return
    embed: dict[str, Any] = {
        "title": f"{preset.name} - {verb}",
        "description": f"Preset {verb.lower()} by {ctx.display_name}",
        "color": status_color(status),
        "footer": {"text": f"ID: {preset.id}"},
    }
    if reason:
        embed["fields"] = [{"name": "Reason", "value": reason}]
    try:
        await services.discord_client.send_channel_message(
            services.submission_log_channel_id, {"embeds": [embed]}
        )
    except CollaboratorFailureError as exc:
        logger.warning(
            "preset_moderation_log_failed",
            extra={"preset_id": preset.id, "error_type": type(exc).__name__},
        )


async def _moderate(
    ctx: InteractionContext,
    preset_id: str,
    status: PresetStatus,
    reason: str | None = None,
) -> None:
    preset_api = ctx.services.preset_api
    if preset_api is None:
        raise RuntimeError("preset_api_not_configured")

    original = _original_embed(ctx.envelope)  # type: ignore[arg-type]
    verb = "Approved" if status is PresetStatus.APPROVED else "Rejected"
    try:
        preset = await preset_api.update_status(
            preset_id, status, ctx.user_id or "", reason
        )
    except Exception as exc:
        logger.warning(
            "preset_moderation_failed",
            extra={
                "preset_id": preset_id,
                "status": status.value,
                "error_type": type(exc).__name__,
                "error": str(exc),
            },
        )
        action = "approve" if status is PresetStatus.APPROVED else "reject"
        fields = [
            *original.get("fields", []),
            {
                "name": "Error",
                "value": f"Failed to {action} preset. Please try again.",
                "inline": False,
            },
        ]
        await _edit_moderation_message(
            ctx, {**original, "fields": fields}, remove_buttons=False
        )
        return

    fields = [
        *original.get("fields", []),
        {"name": "Action", "value": f"{verb} by {ctx.display_name}", "inline": True},
    ]
    if reason:
        fields.append({"name": "Reason", "value": reason, "inline": False})
    await _edit_moderation_message(
        ctx,
        {
            **original,
            "title": f"{'✅' if status is PresetStatus.APPROVED else '❌'} Preset {verb}",
            "color": status_color(status),
            "fields": fields,
        },
        remove_buttons=True,
    )
    await _notify_log_channel(ctx, preset, verb, status, reason)
    logger.info("preset_moderated", extra={"status": status.value})


async def handle_approve_button(ctx: InteractionContext) -> InteractionReply:
    custom_id = ctx.envelope.data.custom_id  # type: ignore[union-attr]
    preset_id = custom_id.removeprefix(APPROVE_PREFIX)
    if not preset_id or not ctx.user_id:
        return InteractionReply(ephemeral_response("Invalid button interaction."))
    if not _is_moderator(ctx):
        return InteractionReply(
            ephemeral_response("You do not have permission to approve presets.")
        )

    async def continuation(followup: InteractionContext) -> None:
        await _moderate(followup, preset_id, PresetStatus.APPROVED)

    return InteractionReply(deferred_update_response(), continuation)


async def handle_reject_button(ctx: InteractionContext) -> InteractionReply:
    custom_id = ctx.envelope.data.custom_id  # type: ignore[union-attr]
    preset_id = custom_id.removeprefix(REJECT_PREFIX)
    if not preset_id or not ctx.user_id:
        return InteractionReply(ephemeral_response("Invalid button interaction."))
    if not _is_moderator(ctx):
        return InteractionReply(
            ephemeral_response("You do not have permission to reject presets.")
        )

    return InteractionReply(
        modal_response(
            f"{REJECT_MODAL_PREFIX}{preset_id}",
            "Reject Preset",
            [
                text_input_row(
                    REJECTION_REASON_FIELD,
                    "Reason for rejection",
                    max_length=MAX_REASON_LENGTH,
                    placeholder="Please provide a clear reason for rejecting this preset...",
                )
            ],
        )
    )


async def handle_reject_modal(ctx: InteractionContext) -> InteractionReply:
    data = ctx.envelope.data  # type: ignore[union-attr]
    preset_id = data.custom_id.removeprefix(REJECT_MODAL_PREFIX)
    if not preset_id or not ctx.user_id:
        return _ephemeral_error("Invalid modal submission.")
    if not _is_moderator(ctx):
        return _ephemeral_error("You do not have permission to reject presets.")

    reason = (data.field_value(REJECTION_REASON_FIELD) or "").strip()
    if len(reason) < MIN_REASON_LENGTH:
        return _ephemeral_error(
            "Please provide a valid rejection reason "
            f"(at least {MIN_REASON_LENGTH} characters)."
        )

    async def continuation(followup: InteractionContext) -> None:
        await _moderate(followup, preset_id, PresetStatus.REJECTED, reason)

    return InteractionReply(deferred_update_response(), continuation)
