"""Testes da execução de continuations."""

from __future__ import annotations

import pytest

from app.coordinators.discord.context import HandlerServices, InteractionContext
from app.coordinators.discord.continuation import GENERIC_FAILURE_EMBED, run_continuation
from tests.fakes.fake_discord_client import FakeDiscordClient
from app.domain.deadline import DeadlineBudget, DeadlinePhase
from tests.fakes.interactions import command_payload, expired_budget, make_context


class TestRunContinuation:
    @pytest.mark.asyncio
    async def test_successful_work_no_report(self) -> None:
        client = FakeDiscordClient()
        ctx = make_context(command_payload("stats"), HandlerServices(discord_client=client))
        ran: list[bool] = []

        async def work(_: InteractionContext) -> None:
            ran.append(True)

        await run_continuation(ctx, work)

        assert ran == [True]
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_failure_edits_original_with_generic_message(self) -> None:
        """Exceção no trabalho vira edição best-effort com mensagem genérica."""
        client = FakeDiscordClient()
        ctx = make_context(command_payload("stats"), HandlerServices(discord_client=client))

        async def work(_: InteractionContext) -> None:
            raise RuntimeError("boom")

        await run_continuation(ctx, work)

        assert client.operations() == ["edit_original_response"]
        assert client.calls[0].payload == {"content": "", "embeds": [GENERIC_FAILURE_EMBED]}

    @pytest.mark.asyncio
    async def test_failure_after_deadline_not_reported(self) -> None:
        client = FakeDiscordClient()
        ctx = make_context(
            command_payload("stats"),
            HandlerServices(discord_client=client),
            budget=expired_budget(),
        )

        async def work(_: InteractionContext) -> None:
            raise RuntimeError("boom")

        await run_continuation(ctx, work)

        assert client.calls == []

    @pytest.mark.asyncio
    async def test_report_failure_is_swallowed(self) -> None:
        """Nem a falha do relatório escapa da continuation."""
        client = FakeDiscordClient(fail=True)
        ctx = make_context(command_payload("stats"), HandlerServices(discord_client=client))

        async def work(_: InteractionContext) -> None:
            raise RuntimeError("boom")

        await run_continuation(ctx, work)

        assert client.operations() == ["edit_original_response"]

    @pytest.mark.asyncio
    async def test_failure_without_client(self) -> None:
        ctx = make_context(command_payload("stats"))

        async def work(_: InteractionContext) -> None:
            raise RuntimeError("boom")

        await run_continuation(ctx, work)

    @pytest.mark.asyncio
    async def test_work_receives_followup_phase_budget(self) -> None:
        """O trabalho mede o tempo contra a janela de follow-up, mesmo início."""
        ctx = make_context(command_payload("stats"))
        seen: list[InteractionContext] = []

        async def work(followup: InteractionContext) -> None:
            seen.append(followup)

        await run_continuation(ctx, work)

        assert seen[0].budget.phase is DeadlinePhase.FOLLOWUP
        assert seen[0].budget.start_time == ctx.budget.start_time
        assert seen[0].envelope is ctx.envelope
        assert ctx.budget.phase is DeadlinePhase.ACK

    @pytest.mark.asyncio
    async def test_failure_reported_after_ack_window(self) -> None:
        """ACK já expirado não impede o relatório dentro da janela de follow-up."""
        ticks = iter([0.0])
        budget = DeadlineBudget(
            ack_deadline_ms=10,
            followup_deadline_ms=100_000,
            clock=lambda: next(ticks, 50.0),
        )
        client = FakeDiscordClient()
        ctx = make_context(
            command_payload("stats"), HandlerServices(discord_client=client), budget=budget
        )

        async def work(_: InteractionContext) -> None:
            raise RuntimeError("boom")

        assert budget.is_exceeded is True
        await run_continuation(ctx, work)

        assert client.operations() == ["edit_original_response"]
