"""Handler do comando /stats (restrito).

Responde com ACK adiado efêmero; a continuation lê os contadores de
analytics e edita a resposta original.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.coordinators.discord.followup import edit_original_response_with_deadline
from app.domain.reply import InteractionReply
from app.domain.responses import COLOR_INFO, deferred_response, ephemeral_response, error_embed

if TYPE_CHECKING:
    from app.coordinators.discord.context import InteractionContext

logger = logging.getLogger(__name__)

TOP_COMMANDS = 5


def build_stats_embed(stats: dict[str, Any]) -> dict[str, Any]:
    total = int(stats.get("total_commands") or 0)
    successful = int(stats.get("successful_commands") or 0)
    unique_users = int(stats.get("unique_users") or 0)
    breakdown: dict[str, int] = dict(stats.get("command_breakdown") or {})
    success_rate = (successful / total * 100) if total else 0.0

    top = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)[:TOP_COMMANDS]
    top_text = (
        "\n".join(
            f"{index}. `/{name}` - {count:,} uses"
            for index, (name, count) in enumerate(top, start=1)
        )
        or "No commands executed yet"
    )
    return {
        "title": "📊 Bot Statistics",
        "color": COLOR_INFO,
        "fields": [
            {
                "name": "📈 Usage",
                "value": (
                    f"**Total Commands:** {total:,}\n"
                    f"**Success Rate:** {success_rate:.1f}%\n"
                    f"**Unique Users Today:** {unique_users:,}"
                ),
                "inline": True,
            },
            {"name": "⭐ Top Commands", "value": top_text, "inline": False},
        ],
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }


async def handle_stats(ctx: InteractionContext) -> InteractionReply:
    services = ctx.services
    if not ctx.user_id or ctx.user_id not in services.stats_authorized_users:
        return InteractionReply(
            ephemeral_response(
                data={
                    "embeds": [
                        error_embed(
                            "Access Denied",
                            "You do not have permission to view bot statistics.",
                        )
                    ]
                }
            )
        )

    async def continuation(followup: InteractionContext) -> None:
        client = services.discord_client
        if client is None or services.analytics is None:
            logger.warning("stats_unavailable", extra={"reason": "missing_collaborator"})
            return
        stats = await services.analytics.get_stats()
        result = await edit_original_response_with_deadline(
            client,
            followup.envelope,
            followup.budget,
            {"embeds": [build_stats_embed(stats)]},
        )
        logger.info(
            "stats_delivered",
            extra={"sent": result.sent, "deadline_exceeded": result.deadline_exceeded},
        )

    return InteractionReply(deferred_response(ephemeral=True), continuation)
