"""Tabelas de rota padrão do gateway."""

from __future__ import annotations

from dataclasses import dataclass

from app.coordinators.discord.handlers import (
    about,
    copy,
    manual,
    preset_autocomplete,
    preset_moderation,
    stats,
)
from app.coordinators.discord.routing import AutocompleteRouter, CommandRouter, PrefixRouter


@dataclass(frozen=True)
class RouteTables:
    commands: CommandRouter
    components: PrefixRouter
    modals: PrefixRouter
    autocomplete: AutocompleteRouter


def build_default_routes() -> RouteTables:
    """Monta e valida as rotas no startup.

    Raises:
        ValueError: Se alguma tabela de prefixos for ambígua
    """
    commands = CommandRouter(
        {
            "about": about.handle_about,
            "manual": manual.handle_manual,
            "stats": stats.handle_stats,
        }
    )
    components = PrefixRouter(
        [
            (copy.COPY_HEX_PREFIX, copy.handle_copy_hex),
            (copy.COPY_RGB_PREFIX, copy.handle_copy_rgb),
            (copy.COPY_HSV_PREFIX, copy.handle_copy_hsv),
            (preset_moderation.APPROVE_PREFIX, preset_moderation.handle_approve_button),
            (preset_moderation.REJECT_PREFIX, preset_moderation.handle_reject_button),
        ]
    )
    modals = PrefixRouter(
        [
            (preset_moderation.REJECT_MODAL_PREFIX, preset_moderation.handle_reject_modal),
        ]
    )
    autocomplete = AutocompleteRouter(
        {
            "preset.show.name": preset_autocomplete.approved_presets,
            "preset.vote.name": preset_autocomplete.approved_presets,
            "preset.moderate.name": preset_autocomplete.pending_presets,
            "preset.edit.name": preset_autocomplete.own_presets,
        }
    )
    return RouteTables(
        commands=commands,
        components=components,
        modals=modals,
        autocomplete=autocomplete,
    )
