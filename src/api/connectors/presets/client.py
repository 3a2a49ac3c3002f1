"""Cliente HTTP da API externa de presets.

Autentica com `Authorization: Bearer <BOT_API_SECRET>` e identifica o
usuário atuante em `X-User-Discord-ID`. Qualquer falha (transporte,
status de erro, JSON inválido) vira CollaboratorFailureError.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError
from app.domain.preset import PresetStatus, PresetSummary
from app.protocols.preset_api import PresetApiProtocol
from utils.errors import CollaboratorFailureError

if TYPE_CHECKING:
    import httpx

    from config.settings.presets import PresetApiSettings

logger = logging.getLogger(__name__)

COLLABORATOR = "preset_api"


class HttpPresetApi(PresetApiProtocol):
    """Implementação HTTP do PresetApiProtocol."""

    def __init__(
        self,
        api_url: str,
        api_secret: str,
        *,
        timeout_seconds: float = 5.0,
        max_retries: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._configured = bool(api_url and api_secret)
        self._http = HttpClient(
            HttpClientConfig(
                base_url=api_url.rstrip("/"),
                timeout_seconds=timeout_seconds,
                max_retries=max_retries,
                default_headers={
                    "Authorization": f"Bearer {api_secret}",
                    "Content-Type": "application/json",
                },
            ),
            transport=transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        user_id: str | None = None,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        if not self._configured:
            raise CollaboratorFailureError(COLLABORATOR, "Preset API not configured")

        headers = {"X-User-Discord-ID": user_id} if user_id else None
        try:
            response = await self._http.request(
                method, path, params=params, json=body, headers=headers
            )
        except HttpError as exc:
            raise CollaboratorFailureError(
                COLLABORATOR, "Failed to communicate with preset API"
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise CollaboratorFailureError(COLLABORATOR, "invalid_json_response") from exc

        if not response.is_success:
            message = (
                (data.get("message") or data.get("error")) if isinstance(data, dict) else None
            )
            logger.warning(
                "preset_api_error_status",
                extra={"status_code": response.status_code, "path": path},
            )
            raise CollaboratorFailureError(
                COLLABORATOR,
                message or f"API request failed with status {response.status_code}",
            )
        if not isinstance(data, dict):
            raise CollaboratorFailureError(COLLABORATOR, "unexpected_response_shape")
        return data

    @staticmethod
    def _presets(data: dict[str, Any]) -> list[PresetSummary]:
        try:
            return [PresetSummary.model_validate(item) for item in data.get("presets") or []]
        except ValidationError as exc:
            raise CollaboratorFailureError(COLLABORATOR, "invalid_preset_payload") from exc

    async def search_presets(
        self,
        query: str,
        *,
        status: PresetStatus = PresetStatus.APPROVED,
        limit: int = 25,
    ) -> list[PresetSummary]:
        params: dict[str, Any] = {"status": status.value, "limit": limit}
        if query:
            params["search"] = query
        else:
            params["sort"] = "popular"
        data = await self._request("GET", "/api/v1/presets", params=params)
        return self._presets(data)

    async def list_user_presets(self, user_id: str, query: str = "") -> list[PresetSummary]:
        data = await self._request("GET", "/api/v1/presets/mine", user_id=user_id)
        presets = self._presets(data)
        if query:
            lowered = query.lower()
            presets = [preset for preset in presets if lowered in preset.name.lower()]
        return presets

    async def update_status(
        self,
        preset_id: str,
        status: PresetStatus,
        moderator_id: str,
        reason: str | None = None,
    ) -> PresetSummary:
        data = await self._request(
            "PATCH",
            f"/api/v1/moderation/{preset_id}/status",
            user_id=moderator_id,
            body={"status": status.value, "reason": reason},
        )
        try:
            return PresetSummary.model_validate(data.get("preset"))
        except ValidationError as exc:
            raise CollaboratorFailureError(COLLABORATOR, "invalid_preset_payload") from exc


def create_preset_api(
    settings: PresetApiSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpPresetApi:
    """Factory para o cliente de presets a partir das settings."""
    from config.settings import get_preset_api_settings

    presets = settings or get_preset_api_settings()
    return HttpPresetApi(
        presets.api_url,
        presets.api_secret,
        timeout_seconds=presets.request_timeout_seconds,
        max_retries=presets.max_retries,
        transport=transport,
    )
