"""Cliente HTTP especializado para a Discord REST API.

Estende HttpClient genérico com os endpoints usados pelo gateway:
- Webhook da interação (token): follow-up, editar e apagar @original
- Canal (token do bot): enviar e editar mensagens fora da interação

Um anexo opcional troca o corpo JSON por multipart (`payload_json` +
`files[0]`) e reescreve as referências `attachment://` dos embeds.
Tokens nunca aparecem em logs.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError
from app.domain.responses import attachment_metadata, rewrite_attachment_references
from utils.errors import CollaboratorFailureError

if TYPE_CHECKING:
    import httpx

    from app.protocols.discord_client import FileAttachment
    from config.settings import DiscordSettings

logger: logging.Logger = logging.getLogger(__name__)


def build_multipart(
    payload: dict[str, Any],
    file: FileAttachment,
) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]]]:
    """Monta as partes `payload_json` e `files[0]` de um envio com anexo."""
    body = rewrite_attachment_references(payload, file.filename)
    body["attachments"] = attachment_metadata(file.filename)
    data = {"payload_json": json.dumps(body)}
    files = {"files[0]": (file.filename, file.content, file.content_type)}
    return data, files


class DiscordHttpClient(HttpClient):
    """Cliente HTTP para a Discord API.

    Devolve o status HTTP; falhas de transporte e status retryable
    esgotados viram CollaboratorFailureError.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        bot_token: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, transport=transport)
        self._bot_token = bot_token

    async def _send(
        self,
        method: str,
        path: str,
        operation: str,
        payload: dict[str, Any] | None = None,
        file: FileAttachment | None = None,
        headers: dict[str, str] | None = None,
    ) -> int:
        kwargs: dict[str, Any] = {"headers": headers}
        if file is not None and payload is not None:
            kwargs["data"], kwargs["files"] = build_multipart(payload, file)
        elif payload is not None:
            kwargs["json"] = payload
        try:
            response = await self.request(method, path, **kwargs)
        except HttpError as exc:
            logger.warning(
                "discord_api_request_failed",
                extra={
                    "operation": operation,
                    "status_code": exc.status_code,
                    "reason": str(exc),
                },
            )
            raise CollaboratorFailureError("discord_api", str(exc)) from exc

        log = logger.info if response.is_success else logger.warning
        log(
            "discord_api_response",
            extra={"operation": operation, "status_code": response.status_code},
        )
        return response.status_code

    def _bot_headers(self) -> dict[str, str]:
        if not self._bot_token:
            raise CollaboratorFailureError("discord_api", "bot_token_not_configured")
        return {"Authorization": f"Bot {self._bot_token}"}

    # ──────────────────────────────────────────────────────────────
    # Webhook da interação
    # ──────────────────────────────────────────────────────────────

    async def send_followup(
        self,
        application_id: str,
        token: str,
        payload: dict[str, Any],
        file: FileAttachment | None = None,
    ) -> int:
        return await self._send(
            "POST", f"/webhooks/{application_id}/{token}", "send_followup", payload, file
        )

    async def edit_original_response(
        self,
        application_id: str,
        token: str,
        payload: dict[str, Any],
        file: FileAttachment | None = None,
    ) -> int:
        return await self._send(
            "PATCH",
            f"/webhooks/{application_id}/{token}/messages/@original",
            "edit_original_response",
            payload,
            file,
        )

    async def delete_original_response(self, application_id: str, token: str) -> int:
        return await self._send(
            "DELETE",
            f"/webhooks/{application_id}/{token}/messages/@original",
            "delete_original_response",
        )

    # ──────────────────────────────────────────────────────────────
    # Canal (token do bot)
    # ──────────────────────────────────────────────────────────────

    async def send_channel_message(self, channel_id: str, payload: dict[str, Any]) -> int:
        return await self._send(
            "POST",
            f"/channels/{channel_id}/messages",
            "send_channel_message",
            payload,
            headers=self._bot_headers(),
        )

    async def edit_channel_message(
        self,
        channel_id: str,
        message_id: str,
        payload: dict[str, Any],
    ) -> int:
        return await self._send(
            "PATCH",
            f"/channels/{channel_id}/messages/{message_id}",
            "edit_channel_message",
            payload,
            headers=self._bot_headers(),
        )


def create_discord_http_client(
    settings: DiscordSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DiscordHttpClient:
    """Factory para criar cliente Discord com config padrão.

    Args:
        settings: DiscordSettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx alternativo (testes)
    """
    from config.settings import get_discord_settings

    discord = settings or get_discord_settings()
    config = HttpClientConfig(
        base_url=discord.api_endpoint,
        timeout_seconds=discord.request_timeout_seconds,
        max_retries=discord.max_retries,
        default_headers={"User-Agent": "DiscordBot (dyebot-gateway, 1.0)"},
    )
    return DiscordHttpClient(config=config, bot_token=discord.bot_token, transport=transport)
