"""Modelos de presets da comunidade consumidos pelo gateway.

O gateway não aplica regras de negócio de presets: estes modelos
cobrem apenas o que os handlers de moderação e autocomplete e o
webhook interno precisam ler.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PresetStatus(str, Enum):
    """Status de moderação."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    FLAGGED = "flagged"


# Ícone e cor de embed por status
STATUS_DISPLAY: dict[PresetStatus, tuple[str, int]] = {
    PresetStatus.PENDING: ("🟡", 0xFEE75C),
    PresetStatus.APPROVED: ("🟢", 0x57F287),
    PresetStatus.REJECTED: ("🔴", 0xED4245),
    PresetStatus.FLAGGED: ("🟠", 0xF5A623),
}


def status_color(status: PresetStatus) -> int:
    return STATUS_DISPLAY[status][1]


class PresetSummary(BaseModel):
    """Preset devolvido pela API de presets."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    description: str = ""
    category_id: str = ""
    dyes: tuple[int, ...] = ()
    tags: tuple[str, ...] = ()
    author_discord_id: str | None = None
    author_name: str | None = None
    vote_count: int = 0
    status: PresetStatus = PresetStatus.PENDING

    def autocomplete_label(self) -> str:
        """Rótulo de escolha: "Nome (N★) by Autor", no máximo 100 chars."""
        label = f"{self.name} ({self.vote_count}★)"
        if self.author_name:
            label = f"{label} by {self.author_name}"
        return label[:100]


class SubmittedPreset(BaseModel):
    """Preset recebido pelo webhook interno de submissões."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    category_id: str = ""
    dyes: tuple[int, ...] = ()
    tags: tuple[str, ...] = ()
    author_name: str | None = None
    author_discord_id: str | None = None
    status: PresetStatus
    moderation_status: Literal["clean", "flagged", "auto_approved"] | None = None
    source: Literal["bot", "web", "none"] = "none"
    created_at: str | None = None


class PresetNotificationPayload(BaseModel):
    """Corpo do webhook interno (conjunto fechado de variantes)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["submission"]
    preset: SubmittedPreset


__all__ = [
    "STATUS_DISPLAY",
    "PresetNotificationPayload",
    "PresetStatus",
    "PresetSummary",
    "SubmittedPreset",
    "status_color",
]
