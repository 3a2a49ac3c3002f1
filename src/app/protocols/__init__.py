"""Protocolos e contratos do core da aplicação."""

from .analytics import AnalyticsStoreProtocol
from .discord_client import DiscordClientProtocol, FileAttachment
from .locale import LanguagePreferenceStoreProtocol
from .preset_api import PresetApiProtocol
from .rate_limiter import RateLimiterProtocol
from .task_handle import TaskHandleProtocol

__all__ = [
    "AnalyticsStoreProtocol",
    "DiscordClientProtocol",
    "FileAttachment",
    "LanguagePreferenceStoreProtocol",
    "PresetApiProtocol",
    "RateLimiterProtocol",
    "TaskHandleProtocol",
]
