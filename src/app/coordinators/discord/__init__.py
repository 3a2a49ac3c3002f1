"""Coordenação de interações do Discord."""

from app.coordinators.discord.context import HandlerServices, InteractionContext
from app.coordinators.discord.dispatcher import InteractionDispatcher

__all__ = ["HandlerServices", "InteractionContext", "InteractionDispatcher"]
