"""Handler do comando /manual (guia de uso, sempre efêmero)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.reply import InteractionReply
from app.domain.responses import COLOR_INFO, COLOR_SUCCESS, ephemeral_response

if TYPE_CHECKING:
    from app.coordinators.discord.context import InteractionContext

COLOR_TIPS = 0xFEE75C

COMMAND_HELP: dict[str, str] = {
    "about": "Bot information and the list of active commands.",
    "manual": "This guide.",
    "stats": "Usage statistics (authorized users only).",
    "preset": "Browse, vote on and moderate community dye presets.",
}


def build_manual_embeds(command_names: tuple[str, ...]) -> list[dict[str, object]]:
    fields = [
        {
            "name": f"/{name}",
            "value": COMMAND_HELP.get(name, "No description available."),
            "inline": False,
        }
        for name in command_names
    ]
    return [
        {
            "title": "📖 Manual",
            "description": (
                "Commands run as slash commands. Options with suggestions are "
                "filled in as you type."
            ),
            "color": COLOR_INFO,
        },
        {
            "title": "🧭 Commands",
            "color": COLOR_SUCCESS,
            "fields": fields or [{"name": "-", "value": "No commands registered."}],
        },
        {
            "title": "💡 Tips",
            "color": COLOR_TIPS,
            "description": (
                "Use the copy buttons under a color to get its HEX, RGB or HSV "
                "value in a message only you can see."
            ),
        },
    ]


async def handle_manual(ctx: InteractionContext) -> InteractionReply:
    embeds = build_manual_embeds(ctx.services.command_names)
    return InteractionReply(ephemeral_response(data={"embeds": embeds}))
