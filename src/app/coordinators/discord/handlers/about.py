"""Handler do comando /about."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.reply import InteractionReply
from app.domain.responses import COLOR_INFO, message_response

if TYPE_CHECKING:
    from app.coordinators.discord.context import InteractionContext


async def handle_about(ctx: InteractionContext) -> InteractionReply:
    """Responde imediatamente com informações do bot e comandos ativos."""
    services = ctx.services
    commands = "\n".join(f"`/{name}`" for name in services.command_names) or "-"
    embed = {
        "title": "ℹ️ About",
        "description": (
            "Color tools for FFXIV dyes, served over the Discord "
            "interactions endpoint."
        ),
        "color": COLOR_INFO,
        "fields": [
            {"name": "Service", "value": services.service_name, "inline": True},
            {"name": "Locale", "value": ctx.locale, "inline": True},
            {"name": "Commands", "value": commands, "inline": False},
        ],
    }
    return InteractionReply(message_response({"embeds": [embed]}))
