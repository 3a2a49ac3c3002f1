"""Notificações de presets recebidos pelo webhook interno.

- pending: vai para o canal de moderação com botões Aprovar/Rejeitar
- approved: vai direto para o canal de log de submissões

Outros status são apenas registrados em log.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.preset import PresetStatus, status_color
from app.domain.responses import action_row, button
from utils.errors import CollaboratorFailureError

if TYPE_CHECKING:
    from app.coordinators.discord.context import HandlerServices
    from app.domain.preset import PresetNotificationPayload, SubmittedPreset

logger = logging.getLogger(__name__)

# Estilos de botão da Discord API
BUTTON_STYLE_SUCCESS = 3
BUTTON_STYLE_DANGER = 4


def _format_dyes(dyes: tuple[int, ...]) -> str:
    if not dyes:
        return "None"
    return ", ".join(f"#{dye_id}" for dye_id in dyes)


def _preset_fields(preset: SubmittedPreset) -> list[dict[str, Any]]:
    fields: list[dict[str, Any]] = [
        {"name": "Category", "value": preset.category_id or "Unknown", "inline": True},
        {"name": "Author", "value": preset.author_name or "Unknown", "inline": True},
        {
            "name": "Source",
            "value": "Web App" if preset.source == "web" else "Discord",
            "inline": True,
        },
        {"name": "Dyes", "value": _format_dyes(preset.dyes), "inline": False},
    ]
    if preset.tags:
        fields.append({"name": "Tags", "value": ", ".join(preset.tags), "inline": False})
    return fields


def _preset_embed(
    preset: SubmittedPreset,
    title: str,
    status: PresetStatus,
    footer: str,
) -> dict[str, Any]:
    embed: dict[str, Any] = {
        "title": title,
        "description": f"**{preset.name}**\n\n{preset.description}",
        "color": status_color(status),
        "fields": _preset_fields(preset),
        "footer": {"text": footer},
    }
    if preset.created_at:
        embed["timestamp"] = preset.created_at
    return embed


def build_moderation_message(preset: SubmittedPreset) -> dict[str, Any]:
    """Mensagem do canal de moderação para um preset pendente."""
    return {
        "embeds": [
            _preset_embed(
                preset,
                "🟡 Preset Awaiting Moderation",
                PresetStatus.PENDING,
                f"ID: {preset.id}",
            )
        ],
        "components": [
            action_row(
                button(
                    f"preset_approve_{preset.id}",
                    "Approve",
                    style=BUTTON_STYLE_SUCCESS,
                    emoji="✅",
                ),
                button(
                    f"preset_reject_{preset.id}",
                    "Reject",
                    style=BUTTON_STYLE_DANGER,
                    emoji="❌",
                ),
            )
        ],
    }


def build_published_message(preset: SubmittedPreset) -> dict[str, Any]:
    """Mensagem do canal de log para um preset aprovado automaticamente."""
    return {
        "embeds": [
            _preset_embed(
                preset,
                "🟢 New Preset Published",
                PresetStatus.APPROVED,
                f"ID: {preset.id} • Auto-approved",
            )
        ]
    }


async def notify_preset_submission(
    payload: PresetNotificationPayload,
    services: HandlerServices,
) -> str | None:
    """Publica o preset no canal correspondente ao status.

    Returns:
        ID do canal notificado, ou None se nada foi enviado.
    """
    preset = payload.preset
    logger.info(
        "preset_webhook_received",
        extra={"preset_id": preset.id, "status": preset.status.value, "source": preset.source},
    )

    if preset.status is PresetStatus.PENDING:
        channel_id = services.moderation_channel_id
        message = build_moderation_message(preset)
    elif preset.status is PresetStatus.APPROVED:
        channel_id = services.submission_log_channel_id
        message = build_published_message(preset)
    else:
        return None

    if services.discord_client is None or not channel_id:
        logger.warning(
            "preset_notification_channel_not_configured",
            extra={"status": preset.status.value},
        )
        return None

    try:
        await services.discord_client.send_channel_message(channel_id, message)
    except CollaboratorFailureError as exc:
        logger.warning(
            "preset_notification_failed",
            extra={"preset_id": preset.id, "error_type": type(exc).__name__},
        )
        return None
    return channel_id


__all__ = [
    "build_moderation_message",
    "build_published_message",
    "notify_preset_submission",
]
