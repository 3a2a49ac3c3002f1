"""Fake do DiscordClientProtocol que registra chamadas sem IO."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from utils.errors import CollaboratorFailureError


@dataclass
class RecordedCall:
    operation: str
    args: tuple[Any, ...]
    payload: dict[str, Any] | None = None
    file: Any = None


@dataclass
class FakeDiscordClient:
    """Devolve `status_code` em toda chamada.

    `fail=True` simula falha da API em toda chamada; `fail_operations`
    restringe a falha às operações listadas.
    """

    status_code: int = 200
    fail: bool = False
    fail_operations: frozenset[str] = frozenset()
    calls: list[RecordedCall] = field(default_factory=list)

    def _record(self, call: RecordedCall) -> int:
        self.calls.append(call)
        if self.fail or call.operation in self.fail_operations:
            raise CollaboratorFailureError("discord_api", "http_connection_error")
        return self.status_code

    def operations(self) -> list[str]:
        return [call.operation for call in self.calls]

    async def send_followup(
        self,
        application_id: str,
        token: str,
        payload: dict[str, Any],
        file: Any = None,
    ) -> int:
        return self._record(
            RecordedCall("send_followup", (application_id, token), payload, file)
        )

    async def edit_original_response(
        self,
        application_id: str,
        token: str,
        payload: dict[str, Any],
        file: Any = None,
    ) -> int:
        return self._record(
            RecordedCall("edit_original_response", (application_id, token), payload, file)
        )

    async def delete_original_response(self, application_id: str, token: str) -> int:
        return self._record(RecordedCall("delete_original_response", (application_id, token)))

    async def send_channel_message(self, channel_id: str, payload: dict[str, Any]) -> int:
        return self._record(RecordedCall("send_channel_message", (channel_id,), payload))

    async def edit_channel_message(
        self,
        channel_id: str,
        message_id: str,
        payload: dict[str, Any],
    ) -> int:
        return self._record(
            RecordedCall("edit_channel_message", (channel_id, message_id), payload)
        )
