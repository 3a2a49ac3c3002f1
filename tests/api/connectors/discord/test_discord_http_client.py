"""Testes do DiscordHttpClient com httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from api.connectors.discord.http_client import (
    DiscordHttpClient,
    build_multipart,
    create_discord_http_client,
)
from api.connectors.http_base import HttpClientConfig
from app.protocols.discord_client import FileAttachment
from config.settings import DiscordSettings
from utils.errors import CollaboratorFailureError

BASE_URL = "https://discord.test/api/v10"


def _client(
    handler: Any,
    *,
    bot_token: str = "bot-token",
    max_retries: int = 0,
) -> DiscordHttpClient:
    config = HttpClientConfig(
        base_url=BASE_URL,
        max_retries=max_retries,
        backoff_base_seconds=0,
        backoff_max_seconds=0,
    )
    return DiscordHttpClient(config, bot_token, transport=httpx.MockTransport(handler))


class _Recorder:
    def __init__(self, status_code: int = 200) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = status_code

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"id": "1"})


class TestBuildMultipart:
    def test_rewrites_placeholder_and_adds_attachment_metadata(self) -> None:
        """attachment://image.png vira attachment://result.png."""
        payload = {"embeds": [{"image": {"url": "attachment://image.png"}}]}
        file = FileAttachment("result.png", b"\x89PNG")

        data, files = build_multipart(payload, file)
        body = json.loads(data["payload_json"])

        assert body["embeds"][0]["image"]["url"] == "attachment://result.png"
        assert body["attachments"] == [{"id": 0, "filename": "result.png"}]
        assert files["files[0]"] == ("result.png", b"\x89PNG", "image/png")
        assert payload["embeds"][0]["image"]["url"] == "attachment://image.png"


class TestInteractionWebhookEndpoints:
    @pytest.mark.asyncio
    async def test_send_followup_posts_json(self) -> None:
        """Follow-up sem anexo vai como JSON para /webhooks/{app}/{token}."""
        recorder = _Recorder()
        client = _client(recorder)

        status = await client.send_followup("app-1", "tok", {"content": "hi"})

        request = recorder.requests[0]
        assert status == 200
        assert request.method == "POST"
        assert request.url.path == "/api/v10/webhooks/app-1/tok"
        assert json.loads(request.content) == {"content": "hi"}
        assert "authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_edit_original_with_file_is_multipart(self) -> None:
        """Com anexo, o corpo é multipart com payload_json e files[0]."""
        recorder = _Recorder()
        client = _client(recorder)
        payload = {"embeds": [{"thumbnail": {"url": "attachment://image.png"}}]}

        await client.edit_original_response(
            "app-1", "tok", payload, FileAttachment("swatch.png", b"png-bytes")
        )

        request = recorder.requests[0]
        content = request.content.decode("latin-1")
        assert request.method == "PATCH"
        assert request.url.path == "/api/v10/webhooks/app-1/tok/messages/@original"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert 'name="payload_json"' in content
        assert 'name="files[0]"; filename="swatch.png"' in content
        assert "attachment://swatch.png" in content
        assert "attachment://image.png" not in content

    @pytest.mark.asyncio
    async def test_delete_original(self) -> None:
        """DELETE em @original devolve o status (204)."""
        recorder = _Recorder(status_code=204)
        client = _client(recorder)

        status = await client.delete_original_response("app-1", "tok")

        assert status == 204
        assert recorder.requests[0].method == "DELETE"

    @pytest.mark.asyncio
    async def test_client_error_status_is_returned(self) -> None:
        """4xx (exceto 429) é devolvido ao chamador sem exceção."""
        client = _client(_Recorder(status_code=404))

        assert await client.send_followup("app-1", "tok", {"content": "x"}) == 404

    @pytest.mark.asyncio
    async def test_retryable_exhaustion_becomes_collaborator_failure(self) -> None:
        """5xx persistente vira CollaboratorFailureError após os retries."""
        recorder = _Recorder(status_code=503)
        client = _client(recorder, max_retries=1)

        with pytest.raises(CollaboratorFailureError) as exc_info:
            await client.send_followup("app-1", "tok", {"content": "x"})

        assert exc_info.value.collaborator == "discord_api"
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_connection_error_becomes_collaborator_failure(self) -> None:
        """Erro de conexão vira CollaboratorFailureError."""

        def _handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(CollaboratorFailureError):
            await _client(_handler).send_followup("app-1", "tok", {"content": "x"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error_type", [httpx.ReadError, httpx.RemoteProtocolError, httpx.WriteError]
    )
    async def test_transport_errors_retried_then_translated(
        self, error_type: type[httpx.TransportError]
    ) -> None:
        """Qualquer erro de transporte é repetido e vira CollaboratorFailureError."""
        attempts: list[httpx.Request] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            raise error_type("connection reset", request=request)

        with pytest.raises(CollaboratorFailureError) as exc_info:
            await _client(_handler, max_retries=1).send_followup(
                "app-1", "tok", {"content": "x"}
            )

        assert exc_info.value.collaborator == "discord_api"
        assert len(attempts) == 2


class TestChannelEndpoints:
    @pytest.mark.asyncio
    async def test_send_channel_message_uses_bot_token(self) -> None:
        """Mensagens de canal usam Authorization: Bot <token>."""
        recorder = _Recorder()
        client = _client(recorder)

        await client.send_channel_message("chan-1", {"content": "hello"})

        request = recorder.requests[0]
        assert request.url.path == "/api/v10/channels/chan-1/messages"
        assert request.headers["authorization"] == "Bot bot-token"

    @pytest.mark.asyncio
    async def test_edit_channel_message(self) -> None:
        """PATCH em /channels/{id}/messages/{mid}."""
        recorder = _Recorder()
        client = _client(recorder)

        await client.edit_channel_message("chan-1", "msg-9", {"components": []})

        request = recorder.requests[0]
        assert request.method == "PATCH"
        assert request.url.path == "/api/v10/channels/chan-1/messages/msg-9"

    @pytest.mark.asyncio
    async def test_channel_call_without_bot_token_fails(self) -> None:
        """Sem bot token, nenhuma request é feita."""
        recorder = _Recorder()
        client = _client(recorder, bot_token="")

        with pytest.raises(CollaboratorFailureError):
            await client.send_channel_message("chan-1", {"content": "x"})

        assert recorder.requests == []


class TestFactory:
    @pytest.mark.asyncio
    async def test_factory_uses_versioned_endpoint(self) -> None:
        """Factory monta base_url com a versão da API."""
        recorder = _Recorder()
        settings = DiscordSettings(
            bot_token="b",
            api_base_url="https://discord.test/api",
            api_version="v10",
            max_retries=0,
        )
        client = create_discord_http_client(settings, transport=httpx.MockTransport(recorder))

        await client.send_followup("app", "tok", {"content": "x"})

        assert str(recorder.requests[0].url) == "https://discord.test/api/v10/webhooks/app/tok"
        assert recorder.requests[0].headers["user-agent"].startswith("DiscordBot")
