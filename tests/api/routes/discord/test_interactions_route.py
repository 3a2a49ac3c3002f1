"""Testes da rota POST / (interações assinadas)."""

from __future__ import annotations

import json
from typing import Any

import pytest
from starlette.requests import Request

from api.connectors.discord import RequestGuard
from api.routes.discord import interactions
from app.domain.deadline import DeadlineBudgetFactory
from tests.fakes.interactions import command_payload, ping_payload
from tests.fakes.signing import signed_headers


def _build_request(body: bytes = b"", headers: dict[str, str] | None = None) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


class _StubDispatcher:
    def __init__(self, response: dict[str, Any] | None = None) -> None:
        self.response = response or {"type": 1}
        self.calls: list[tuple[Any, Any, str]] = []

    async def dispatch(self, envelope: Any, budget: Any, correlation_id: str) -> dict[str, Any]:
        self.calls.append((envelope, budget, correlation_id))
        return self.response


@pytest.fixture
def dispatcher(monkeypatch: pytest.MonkeyPatch, public_key_hex: str) -> _StubDispatcher:
    stub = _StubDispatcher()
    monkeypatch.setattr(interactions, "get_request_guard", lambda: RequestGuard(public_key_hex, 2048))
    monkeypatch.setattr(interactions, "get_budget_factory", lambda: DeadlineBudgetFactory())
    monkeypatch.setattr(interactions, "get_dispatcher", lambda: stub)
    return stub


def _body(response: Any) -> dict[str, Any]:
    return json.loads(response.body.decode("utf-8"))


class TestInteractionRoute:
    @pytest.mark.asyncio
    async def test_missing_signature_headers_returns_401(
        self, dispatcher: _StubDispatcher
    ) -> None:
        """Sem headers de assinatura: 401 e dispatcher intocado."""
        response = await interactions.receive_interaction(
            _build_request(json.dumps(ping_payload()).encode())
        )

        assert response.status_code == 401
        assert _body(response) == {"error": "Missing signature headers"}
        assert dispatcher.calls == []

    @pytest.mark.asyncio
    async def test_declared_length_over_ceiling_returns_401(
        self, dispatcher: _StubDispatcher
    ) -> None:
        """Content-Length acima do teto é recusado antes de ler o corpo."""
        response = await interactions.receive_interaction(
            _build_request(b"{}", {"Content-Length": "999999"})
        )

        assert response.status_code == 401
        assert _body(response) == {"error": "Request body too large"}

    @pytest.mark.asyncio
    async def test_invalid_signature_returns_401(
        self, dispatcher: _StubDispatcher, private_key
    ) -> None:
        """Assinatura de outro corpo: 401 Invalid signature."""
        headers = signed_headers(private_key, b"other")

        response = await interactions.receive_interaction(
            _build_request(json.dumps(ping_payload()).encode(), headers)
        )

        assert response.status_code == 401
        assert _body(response) == {"error": "Invalid signature"}

    @pytest.mark.asyncio
    async def test_invalid_json_returns_400(
        self, dispatcher: _StubDispatcher, private_key
    ) -> None:
        """Corpo assinado mas não-JSON: 400."""
        body = b"{broken"

        response = await interactions.receive_interaction(
            _build_request(body, signed_headers(private_key, body))
        )

        assert response.status_code == 400
        assert _body(response) == {"error": "Invalid JSON body"}

    @pytest.mark.asyncio
    async def test_unknown_type_returns_400(
        self, dispatcher: _StubDispatcher, private_key
    ) -> None:
        """Tipo desconhecido: 400 sem passar pelo dispatcher."""
        body = json.dumps({"id": "1", "type": 42}).encode()

        response = await interactions.receive_interaction(
            _build_request(body, signed_headers(private_key, body))
        )

        assert response.status_code == 400
        assert _body(response) == {"error": "Unknown interaction type: 42"}
        assert dispatcher.calls == []

    @pytest.mark.asyncio
    async def test_valid_ping_dispatched(
        self, dispatcher: _StubDispatcher, private_key
    ) -> None:
        """Request válido é despachado e o corpo devolvido com 200."""
        body = json.dumps(ping_payload()).encode()

        response = await interactions.receive_interaction(
            _build_request(body, signed_headers(private_key, body))
        )

        assert response.status_code == 200
        assert _body(response) == {"type": 1}
        assert len(dispatcher.calls) == 1

    @pytest.mark.asyncio
    async def test_correlation_id_defaults_to_interaction_id(
        self, dispatcher: _StubDispatcher, private_key
    ) -> None:
        """Sem header de correlação, usa o interaction id e ecoa em X-Request-ID."""
        payload = command_payload("about")
        body = json.dumps(payload).encode()

        response = await interactions.receive_interaction(
            _build_request(body, signed_headers(private_key, body))
        )

        assert dispatcher.calls[0][2] == payload["id"]
        assert response.headers["x-request-id"] == payload["id"]

    @pytest.mark.asyncio
    async def test_correlation_id_from_header(
        self, dispatcher: _StubDispatcher, private_key
    ) -> None:
        """x-request-id do cliente é preservado."""
        body = json.dumps(ping_payload()).encode()
        headers = {**signed_headers(private_key, body), "X-Request-ID": "req-77"}

        response = await interactions.receive_interaction(_build_request(body, headers))

        assert dispatcher.calls[0][2] == "req-77"
        assert response.headers["x-request-id"] == "req-77"

    @pytest.mark.asyncio
    async def test_budget_started_per_request(
        self, dispatcher: _StubDispatcher, private_key
    ) -> None:
        """Cada request recebe um budget novo e ainda dentro da janela."""
        body = json.dumps(ping_payload()).encode()

        await interactions.receive_interaction(
            _build_request(body, signed_headers(private_key, body))
        )

        budget = dispatcher.calls[0][1]
        assert budget.ack_deadline_ms == 2800
        assert budget.is_exceeded is False
