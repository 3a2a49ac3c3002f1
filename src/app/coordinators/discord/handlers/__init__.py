"""Handlers de interação embarcados no gateway."""

from app.coordinators.discord.handlers.registry import RouteTables, build_default_routes

__all__ = ["RouteTables", "build_default_routes"]
