"""Testes do comando /stats."""

from __future__ import annotations

import pytest

from app.coordinators.discord.context import HandlerServices
from app.coordinators.discord.handlers.stats import build_stats_embed, handle_stats
from app.domain.responses import EPHEMERAL_FLAG
from app.infra.stores import MemoryAnalyticsStore
from tests.fakes.fake_discord_client import FakeDiscordClient
from tests.fakes.interactions import USER_ID, command_payload, expired_budget, make_context


class TestBuildStatsEmbed:
    def test_usage_and_top_commands(self) -> None:
        embed = build_stats_embed(
            {
                "total_commands": 4,
                "successful_commands": 3,
                "unique_users": 2,
                "command_breakdown": {"dye": 3, "about": 1},
            }
        )

        usage, top = embed["fields"]
        assert "**Success Rate:** 75.0%" in usage["value"]
        assert "**Unique Users Today:** 2" in usage["value"]
        assert top["value"].splitlines()[0] == "1. `/dye` - 3 uses"

    def test_empty_stats(self) -> None:
        embed = build_stats_embed({})

        assert "0.0%" in embed["fields"][0]["value"]
        assert embed["fields"][1]["value"] == "No commands executed yet"


class TestHandleStats:
    @pytest.mark.asyncio
    async def test_unauthorized_user_denied(self) -> None:
        reply = await handle_stats(make_context(command_payload("stats")))

        assert reply.continuation is None
        assert reply.response["data"]["flags"] == EPHEMERAL_FLAG
        assert "Access Denied" in reply.response["data"]["embeds"][0]["title"]

    @pytest.mark.asyncio
    async def test_authorized_defers_and_edits(self) -> None:
        """ACK adiado efêmero; a continuation edita a resposta com os contadores."""
        analytics = MemoryAnalyticsStore()
        await analytics.track_command("dye", USER_ID, success=True)
        client = FakeDiscordClient()
        services = HandlerServices(
            discord_client=client,
            analytics=analytics,
            stats_authorized_users=frozenset({USER_ID}),
        )

        ctx = make_context(command_payload("stats"), services)

        reply = await handle_stats(ctx)

        assert reply.response == {"type": 5, "data": {"flags": EPHEMERAL_FLAG}}
        assert client.calls == []
        await reply.continuation(ctx.for_followup())
        assert client.operations() == ["edit_original_response"]
        embed = client.calls[0].payload["embeds"][0]
        assert embed["title"] == "📊 Bot Statistics"

    @pytest.mark.asyncio
    async def test_continuation_respects_deadline(self) -> None:
        client = FakeDiscordClient()
        services = HandlerServices(
            discord_client=client,
            analytics=MemoryAnalyticsStore(),
            stats_authorized_users=frozenset({USER_ID}),
        )

        ctx = make_context(command_payload("stats"), services, budget=expired_budget())

        reply = await handle_stats(ctx)
        await reply.continuation(ctx.for_followup())

        assert client.calls == []
