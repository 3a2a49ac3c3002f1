"""Agregador de settings do gateway.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    StoreBackend,
    StoreSettings,
    get_base_settings,
    get_store_settings,
)

# Channel-specific settings
from config.settings.discord import (
    DEFAULT_ACK_DEADLINE_MS,
    DEFAULT_FOLLOWUP_DEADLINE_MS,
    DEFAULT_MAX_BODY_BYTES,
    DISCORD_API_BASE_URL,
    DISCORD_API_VERSION,
    DiscordSettings,
    get_discord_settings,
)

# Collaborators
from config.settings.presets import PresetApiSettings, get_preset_api_settings

__all__ = [
    # Constants
    "DEFAULT_ACK_DEADLINE_MS",
    "DEFAULT_FOLLOWUP_DEADLINE_MS",
    "DEFAULT_MAX_BODY_BYTES",
    "DISCORD_API_BASE_URL",
    "DISCORD_API_VERSION",
    # Base
    "BaseSettings",
    # Discord
    "DiscordSettings",
    "Environment",
    "StoreBackend",
    # Presets
    "PresetApiSettings",
    # Stores
    "StoreSettings",
    "get_base_settings",
    "get_discord_settings",
    "get_preset_api_settings",
    "get_store_settings",
]
