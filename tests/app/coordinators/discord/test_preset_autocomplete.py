"""Testes das consultas de autocomplete de presets."""

from __future__ import annotations

import pytest

from app.coordinators.discord.context import HandlerServices
from app.coordinators.discord.handlers.preset_autocomplete import (
    approved_presets,
    own_presets,
    pending_presets,
)
from app.domain.preset import PresetStatus, PresetSummary
from tests.fakes.fake_preset_api import FakePresetApi
from tests.fakes.interactions import MODERATOR_ID, USER_ID, autocomplete_payload, make_context
from utils.errors import CollaboratorFailureError

PRESETS = [
    PresetSummary(
        id="p1", name="Sunset", status=PresetStatus.APPROVED, vote_count=3, author_name="Alice"
    ),
    PresetSummary(id="p2", name="Sunrise", status=PresetStatus.PENDING),
    PresetSummary(
        id="p3", name="Mine", status=PresetStatus.REJECTED, author_discord_id=USER_ID
    ),
    PresetSummary(
        id="p4", name="Mine Too", status=PresetStatus.APPROVED, author_discord_id=USER_ID
    ),
]


def _ctx(api: FakePresetApi | None, *, user_id: str = USER_ID):
    services = HandlerServices(preset_api=api, moderator_ids=frozenset({MODERATOR_ID}))
    return make_context(autocomplete_payload("preset", [], user_id=user_id), services)


class TestApprovedPresets:
    @pytest.mark.asyncio
    async def test_labels_and_ids(self) -> None:
        api = FakePresetApi(PRESETS)

        choices = await approved_presets(_ctx(api), "sun")

        assert choices == [{"name": "Sunset (3★) by Alice", "value": "p1"}]
        assert api.searches == [("sun", PresetStatus.APPROVED, 25)]

    @pytest.mark.asyncio
    async def test_without_api(self) -> None:
        assert await approved_presets(_ctx(None), "sun") == []

    @pytest.mark.asyncio
    async def test_api_failure_propagates(self) -> None:
        """Falha sobe para o dispatcher, que responde com lista vazia."""
        with pytest.raises(CollaboratorFailureError):
            await approved_presets(_ctx(FakePresetApi(fail_with="down")), "sun")


class TestPendingPresets:
    @pytest.mark.asyncio
    async def test_only_moderators(self) -> None:
        api = FakePresetApi(PRESETS)

        assert await pending_presets(_ctx(api), "sun") == []
        assert api.searches == []

    @pytest.mark.asyncio
    async def test_moderator_sees_queue(self) -> None:
        api = FakePresetApi(PRESETS)

        choices = await pending_presets(_ctx(api, user_id=MODERATOR_ID), "")

        assert [choice["value"] for choice in choices] == ["p2"]


class TestOwnPresets:
    @pytest.mark.asyncio
    async def test_status_suffix_when_not_approved(self) -> None:
        choices = await own_presets(_ctx(FakePresetApi(PRESETS)), "")

        assert choices == [
            {"name": "Mine (rejected)", "value": "p3"},
            {"name": "Mine Too", "value": "p4"},
        ]

    @pytest.mark.asyncio
    async def test_filters_by_query(self) -> None:
        choices = await own_presets(_ctx(FakePresetApi(PRESETS)), "TOO")

        assert choices == [{"name": "Mine Too", "value": "p4"}]
