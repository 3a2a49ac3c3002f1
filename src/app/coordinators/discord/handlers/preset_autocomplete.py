"""Consultas de autocomplete do comando /preset."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.preset import PresetStatus
from app.domain.responses import MAX_AUTOCOMPLETE_CHOICES

if TYPE_CHECKING:
    from app.coordinators.discord.context import InteractionContext
    from app.domain.preset import PresetSummary


def _choices(presets: list[PresetSummary]) -> list[dict[str, Any]]:
    return [
        {"name": preset.autocomplete_label(), "value": preset.id}
        for preset in presets[:MAX_AUTOCOMPLETE_CHOICES]
    ]


async def _search(
    ctx: InteractionContext,
    query: str,
    status: PresetStatus,
) -> list[dict[str, Any]]:
    preset_api = ctx.services.preset_api
    if preset_api is None:
        return []
    presets = await preset_api.search_presets(
        query, status=status, limit=MAX_AUTOCOMPLETE_CHOICES
    )
    return _choices(presets)


async def approved_presets(ctx: InteractionContext, query: str) -> list[dict[str, Any]]:
    """preset show/vote: presets publicados."""
    return await _search(ctx, query, PresetStatus.APPROVED)


async def pending_presets(ctx: InteractionContext, query: str) -> list[dict[str, Any]]:
    """preset moderate: fila de moderação (apenas moderadores)."""
    if not ctx.user_id or ctx.user_id not in ctx.services.moderator_ids:
        return []
    return await _search(ctx, query, PresetStatus.PENDING)


async def own_presets(ctx: InteractionContext, query: str) -> list[dict[str, Any]]:
    """preset edit: presets do próprio usuário, com status quando não publicado."""
    preset_api = ctx.services.preset_api
    if preset_api is None or not ctx.user_id:
        return []
    presets = await preset_api.list_user_presets(ctx.user_id)
    lowered = query.lower()
    if lowered:
        presets = [preset for preset in presets if lowered in preset.name.lower()]
    return [
        {
            "name": preset.name
            if preset.status is PresetStatus.APPROVED
            else f"{preset.name} ({preset.status.value})",
            "value": preset.id,
        }
        for preset in presets[:MAX_AUTOCOMPLETE_CHOICES]
    ]
