"""Conector da API de presets da comunidade."""

from .client import HttpPresetApi, create_preset_api

__all__ = ["HttpPresetApi", "create_preset_api"]
