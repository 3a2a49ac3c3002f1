"""Dispatcher de interações do Discord.

Classifica o envelope pelo tipo, aplica o gate de rate limit a
comandos e encaminha para o handler registrado. Toda falha de handler
vira resposta 200 com mensagem efêmera; apenas erros de
autenticação/parse (tratados antes) viram 4xx.

Ordem garantida: a resposta síncrona é montada primeiro e só então a
continuation (e o registro de analytics) é entregue ao TaskHandle.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.coordinators.discord.context import HandlerServices, InteractionContext
from app.coordinators.discord.continuation import run_continuation
from app.domain.interaction import (
    AutocompleteInteraction,
    CommandInteraction,
    ComponentInteraction,
    InteractionType,
    ModalSubmitInteraction,
    PingInteraction,
)
from app.domain.rate_limit import (
    RATE_LIMIT_EXEMPT_COMMANDS,
    RateLimitDecision,
    limit_for_command,
    rate_limited_message,
)
from app.domain.reply import InteractionReply
from app.domain.responses import (
    autocomplete_response,
    ephemeral_response,
    error_embed,
    pong_response,
)
from app.observability import record_interaction, record_latency
from app.services.locale import DEFAULT_LOCALE
from config.logging import log_fallback
from utils.errors import HandlerNotFoundError, UnknownInteractionTypeError

if TYPE_CHECKING:
    from app.coordinators.discord.routing import (
        AutocompleteRouter,
        CommandRouter,
        InteractionHandler,
        PrefixRouter,
    )
    from app.domain.deadline import DeadlineBudget
    from app.domain.interaction import InteractionEnvelope
    from app.protocols.analytics import AnalyticsStoreProtocol
    from app.protocols.rate_limiter import RateLimiterProtocol
    from app.protocols.task_handle import TaskHandleProtocol
    from app.services.locale import LocaleResolver

logger = logging.getLogger(__name__)

UNKNOWN_COMPONENT_MESSAGE = "This button is not recognized."
UNKNOWN_MODAL_MESSAGE = "Unknown modal submission."
GENERIC_ERROR_EMBED = error_embed(
    "Error",
    "An error occurred while processing your request. Please try again later.",
)


def unknown_command_message(name: str) -> str:
    return f"The `/{name}` command is not yet implemented."


class InteractionDispatcher:
    """Roteia uma interação aceita para o handler correspondente.

    Args:
        commands: Handlers de slash command
        components: Rotas de componentes (botões/selects)
        modals: Rotas de submissão de modal
        autocomplete: Consultas de autocomplete
        task_handle: Único ponto de registro de trabalho em background
        services: Colaboradores compartilhados com os handlers
        rate_limiter: Gate de rate limit (opcional)
        analytics: Store de analytics (opcional)
        locale_resolver: Resolução de locale (opcional)
    """

    def __init__(
        self,
        *,
        commands: CommandRouter,
        components: PrefixRouter,
        modals: PrefixRouter,
        autocomplete: AutocompleteRouter,
        task_handle: TaskHandleProtocol,
        services: HandlerServices | None = None,
        rate_limiter: RateLimiterProtocol | None = None,
        analytics: AnalyticsStoreProtocol | None = None,
        locale_resolver: LocaleResolver | None = None,
    ) -> None:
        self._commands = commands
        self._components = components
        self._modals = modals
        self._autocomplete = autocomplete
        self._task_handle = task_handle
        self._services = services or HandlerServices()
        self._rate_limiter = rate_limiter
        self._analytics = analytics
        self._locale_resolver = locale_resolver

    async def dispatch(
        self,
        envelope: InteractionEnvelope,
        budget: DeadlineBudget,
        correlation_id: str,
    ) -> dict[str, Any]:
        """Produz o corpo da resposta síncrona para a interação.

        Raises:
            UnknownInteractionTypeError: Tipo fora do conjunto conhecido
        """
        started = time.perf_counter()
        try:
            if isinstance(envelope, PingInteraction):
                record_interaction("PING", "ping", "handled", correlation_id)
                return pong_response()
            if isinstance(envelope, CommandInteraction):
                return await self._dispatch_command(envelope, budget, correlation_id)
            if isinstance(envelope, AutocompleteInteraction):
                return await self._dispatch_autocomplete(envelope, budget, correlation_id)
            if isinstance(envelope, ComponentInteraction):
                return await self._dispatch_prefixed(
                    envelope,
                    budget,
                    correlation_id,
                    router=self._components,
                    custom_id=envelope.data.custom_id,
                    kind="component",
                )
            if isinstance(envelope, ModalSubmitInteraction):
                return await self._dispatch_prefixed(
                    envelope,
                    budget,
                    correlation_id,
                    router=self._modals,
                    custom_id=envelope.data.custom_id,
                    kind="modal",
                )
            raise UnknownInteractionTypeError(getattr(envelope, "type", None))
        except HandlerNotFoundError as exc:
            logger.info("handler_not_found", extra={"kind": exc.kind})
            record_interaction(_type_name(envelope), exc.kind, "not_found", correlation_id)
            return ephemeral_response(exc.user_message)
        finally:
            record_latency(
                "dispatcher",
                _type_name(envelope),
                (time.perf_counter() - started) * 1000,
                correlation_id,
            )

    # ──────────────────────────────────────────────────────────────
    # Comandos
    # ──────────────────────────────────────────────────────────────

    async def _dispatch_command(
        self,
        envelope: CommandInteraction,
        budget: DeadlineBudget,
        correlation_id: str,
    ) -> dict[str, Any]:
        name = envelope.data.name
        handler = self._commands.resolve(name)
        if handler is None:
            raise HandlerNotFoundError("command", name, unknown_command_message(name))

        user_id = envelope.user_id
        if user_id and name not in RATE_LIMIT_EXEMPT_COMMANDS:
            decision = await self._check_rate_limit(user_id, name)
            if decision is not None and not decision.allowed:
                logger.info(
                    "command_rate_limited",
                    extra={
                        "command": name,
                        "retry_after_seconds": decision.retry_after_seconds,
                    },
                )
                record_interaction(
                    "APPLICATION_COMMAND", name, "rate_limited", correlation_id
                )
                return ephemeral_response(
                    rate_limited_message(decision.retry_after_seconds)
                )

        ctx = await self._build_context(envelope, budget, correlation_id)
        reply, success = await self._invoke(handler, ctx, route=name)
        response = reply.response

        self._schedule(reply, ctx, route=name)
        self._schedule_analytics(name, user_id, envelope.guild_id, success=success)
        record_interaction(
            "APPLICATION_COMMAND",
            name,
            _outcome(reply, success),
            correlation_id,
        )
        return response

    async def _check_rate_limit(self, user_id: str, command: str) -> RateLimitDecision | None:
        if self._rate_limiter is None:
            return None
        started = time.perf_counter()
        try:
            return await self._rate_limiter.check(user_id, command)
        except Exception:
            log_fallback(
                logger,
                "rate_limiter",
                reason="backend_error",
                elapsed_ms=(time.perf_counter() - started) * 1000,
            )
            return RateLimitDecision.fail_open(limit_for_command(command))

    def _schedule_analytics(
        self,
        command: str,
        user_id: str | None,
        guild_id: str | None,
        *,
        success: bool,
    ) -> None:
        if self._analytics is None:
            return
        self._task_handle.extend(
            self._track_command(command, user_id, guild_id, success=success),
            name=f"analytics:{command}",
        )

    async def _track_command(
        self,
        command: str,
        user_id: str | None,
        guild_id: str | None,
        *,
        success: bool,
    ) -> None:
        if self._analytics is None:
            return
        try:
            await self._analytics.track_command(
                command, user_id, success=success, guild_id=guild_id
            )
        except Exception as exc:
            logger.warning(
                "analytics_track_failed",
                extra={"command": command, "error_type": type(exc).__name__},
            )

    # ──────────────────────────────────────────────────────────────
    # Autocomplete
    # ──────────────────────────────────────────────────────────────

    async def _dispatch_autocomplete(
        self,
        envelope: AutocompleteInteraction,
        budget: DeadlineBudget,
        correlation_id: str,
    ) -> dict[str, Any]:
        focused = envelope.data.focused_option()
        if focused is None:
            record_interaction("AUTOCOMPLETE", envelope.data.name, "not_found", correlation_id)
            return autocomplete_response([])

        option_path, option = focused
        path = (envelope.data.name, *option_path)
        resolved = self._autocomplete.resolve(path)
        if resolved is None:
            record_interaction("AUTOCOMPLETE", ".".join(path), "not_found", correlation_id)
            return autocomplete_response([])

        key, query = resolved
        ctx = await self._build_context(envelope, budget, correlation_id)
        started = time.perf_counter()
        try:
            choices = await query(ctx, str(option.value or ""))
        except Exception:
            log_fallback(
                logger,
                "autocomplete",
                reason="query_error",
                elapsed_ms=(time.perf_counter() - started) * 1000,
            )
            choices = []
        record_interaction("AUTOCOMPLETE", key, "handled", correlation_id)
        return autocomplete_response(choices)

    # ──────────────────────────────────────────────────────────────
    # Componentes e modais
    # ──────────────────────────────────────────────────────────────

    async def _dispatch_prefixed(
        self,
        envelope: ComponentInteraction | ModalSubmitInteraction,
        budget: DeadlineBudget,
        correlation_id: str,
        *,
        router: PrefixRouter,
        custom_id: str,
        kind: str,
    ) -> dict[str, Any]:
        resolved = router.resolve(custom_id)
        if resolved is None:
            message = UNKNOWN_MODAL_MESSAGE if kind == "modal" else UNKNOWN_COMPONENT_MESSAGE
            raise HandlerNotFoundError(kind, custom_id, message)

        type_name = _type_name(envelope)
        prefix, handler = resolved
        ctx = await self._build_context(envelope, budget, correlation_id)
        reply, success = await self._invoke(handler, ctx, route=prefix)
        response = reply.response
        self._schedule(reply, ctx, route=prefix)
        record_interaction(type_name, prefix, _outcome(reply, success), correlation_id)
        return response

    # ──────────────────────────────────────────────────────────────
    # Helpers
    # ──────────────────────────────────────────────────────────────

    async def _invoke(
        self,
        handler: InteractionHandler,
        ctx: InteractionContext,
        *,
        route: str,
    ) -> tuple[InteractionReply, bool]:
        try:
            return await handler(ctx), True
        except Exception as exc:
            logger.exception(
                "handler_failed",
                extra={"route": route, "error_type": type(exc).__name__},
            )
            response = ephemeral_response(data={"embeds": [GENERIC_ERROR_EMBED]})
            return InteractionReply(response), False

    def _schedule(self, reply: InteractionReply, ctx: InteractionContext, *, route: str) -> None:
        if reply.continuation is None:
            return
        self._task_handle.extend(
            run_continuation(ctx, reply.continuation),
            name=f"continuation:{route}",
        )

    async def _build_context(
        self,
        envelope: InteractionEnvelope,
        budget: DeadlineBudget,
        correlation_id: str,
    ) -> InteractionContext:
        return InteractionContext(
            envelope=envelope,
            budget=budget,
            locale=await self._resolve_locale(envelope),
            correlation_id=correlation_id,
            services=self._services,
        )

    async def _resolve_locale(self, envelope: InteractionEnvelope) -> str:
        if self._locale_resolver is None:
            return DEFAULT_LOCALE
        started = time.perf_counter()
        try:
            return await self._locale_resolver.resolve(envelope.user_id, envelope.locale)
        except Exception:
            log_fallback(
                logger,
                "locale_resolver",
                reason="resolver_error",
                elapsed_ms=(time.perf_counter() - started) * 1000,
            )
            return DEFAULT_LOCALE


def _type_name(envelope: Any) -> str:
    try:
        return InteractionType(envelope.type).name
    except (AttributeError, ValueError):
        return "UNKNOWN"


def _outcome(reply: InteractionReply, success: bool) -> str:
    if not success:
        return "failed"
    return "deferred" if reply.continuation is not None else "handled"


__all__ = [
    "GENERIC_ERROR_EMBED",
    "UNKNOWN_COMPONENT_MESSAGE",
    "UNKNOWN_MODAL_MESSAGE",
    "InteractionDispatcher",
    "unknown_command_message",
]
