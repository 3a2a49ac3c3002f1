"""Protocolo do cliente REST do Discord usado pelas continuations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class FileAttachment:
    """Arquivo único enviado em multipart (`files[0]`)."""

    filename: str
    content: bytes
    content_type: str = "image/png"


class DiscordClientProtocol(Protocol):
    """Endpoints de webhook da interação e de canal (token do bot)."""

    async def send_followup(
        self,
        application_id: str,
        token: str,
        payload: dict[str, Any],
        file: FileAttachment | None = None,
    ) -> int:
        """POST /webhooks/{application_id}/{token}; devolve o status HTTP."""

    async def edit_original_response(
        self,
        application_id: str,
        token: str,
        payload: dict[str, Any],
        file: FileAttachment | None = None,
    ) -> int:
        """PATCH .../messages/@original; devolve o status HTTP."""

    async def delete_original_response(self, application_id: str, token: str) -> int:
        """DELETE .../messages/@original; devolve o status HTTP."""

    async def send_channel_message(
        self,
        channel_id: str,
        payload: dict[str, Any],
    ) -> int:
        """POST /channels/{channel_id}/messages com `Authorization: Bot`."""

    async def edit_channel_message(
        self,
        channel_id: str,
        message_id: str,
        payload: dict[str, Any],
    ) -> int:
        """PATCH /channels/{channel_id}/messages/{message_id}."""
