"""Factories do gateway — criação de implementações concretas.

Composition root: lê as settings uma única vez e injeta valores já
resolvidos nos construtores (RequestGuard, WebhookAuthenticator,
DeadlineBudgetFactory). O código de request nunca lê env vars.

Todas as factories são singletons via lru_cache; testes limpam com
`reset_dependencies()`.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from api.connectors.discord import (
    DiscordHttpClient,
    RequestGuard,
    WebhookAuthenticator,
    create_discord_http_client,
)
from api.connectors.presets import HttpPresetApi, create_preset_api
from app.bootstrap.clients import create_async_redis_client
from app.coordinators.discord import HandlerServices, InteractionDispatcher
from app.coordinators.discord.handlers import RouteTables, build_default_routes
from app.domain.deadline import DeadlineBudgetFactory
from app.infra.stores import (
    MemoryAnalyticsStore,
    MemoryLanguagePreferenceStore,
    MemoryRateLimiter,
    RedisAnalyticsStore,
    RedisLanguagePreferenceStore,
    RedisRateLimiter,
)
from app.infra.tasks import AsyncioTaskHandle
from app.services import LocaleResolver
from config.settings import (
    get_base_settings,
    get_discord_settings,
    get_preset_api_settings,
    get_store_settings,
)

if TYPE_CHECKING:
    from app.protocols.analytics import AnalyticsStoreProtocol
    from app.protocols.locale import LanguagePreferenceStoreProtocol
    from app.protocols.rate_limiter import RateLimiterProtocol

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Gateway
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_task_handle() -> AsyncioTaskHandle:
    """TaskHandle do processo (único ponto de agendamento)."""
    return AsyncioTaskHandle()


@lru_cache(maxsize=1)
def get_request_guard() -> RequestGuard:
    settings = get_discord_settings()
    return RequestGuard(settings.public_key, max_body_bytes=settings.max_body_bytes)


@lru_cache(maxsize=1)
def get_webhook_authenticator() -> WebhookAuthenticator:
    return WebhookAuthenticator(get_discord_settings().internal_webhook_secret)


@lru_cache(maxsize=1)
def get_budget_factory() -> DeadlineBudgetFactory:
    settings = get_discord_settings()
    return DeadlineBudgetFactory(
        ack_deadline_ms=settings.ack_deadline_ms,
        followup_deadline_ms=settings.followup_deadline_ms,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Stores
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiterProtocol:
    """Cria rate limiter conforme RATE_LIMIT_BACKEND.

    Raises:
        ValueError: Backend desconhecido
    """
    stores = get_store_settings()
    backend = stores.rate_limit_backend

    if backend == "redis":
        limiter: RateLimiterProtocol = RedisRateLimiter(
            create_async_redis_client(), stores.rate_limit_window_seconds
        )
    elif backend == "memory":
        _warn_memory_outside_dev("rate_limiter")
        limiter = MemoryRateLimiter(stores.rate_limit_window_seconds)
    else:
        msg = f"RATE_LIMIT_BACKEND inválido: {backend}"
        raise ValueError(msg)

    logger.info("rate_limiter_created", extra={"backend": backend})
    return limiter


@lru_cache(maxsize=1)
def get_analytics_store() -> AnalyticsStoreProtocol:
    """Cria store de analytics conforme ANALYTICS_BACKEND.

    Raises:
        ValueError: Backend desconhecido
    """
    backend = get_store_settings().analytics_backend

    if backend == "redis":
        store: AnalyticsStoreProtocol = RedisAnalyticsStore(create_async_redis_client())
    elif backend == "memory":
        _warn_memory_outside_dev("analytics")
        store = MemoryAnalyticsStore()
    else:
        msg = f"ANALYTICS_BACKEND inválido: {backend}"
        raise ValueError(msg)

    logger.info("analytics_store_created", extra={"backend": backend})
    return store


@lru_cache(maxsize=1)
def get_locale_resolver() -> LocaleResolver:
    """Preferências de idioma seguem o mesmo backend do analytics."""
    preference_store: LanguagePreferenceStoreProtocol
    if get_store_settings().analytics_backend == "redis":
        preference_store = RedisLanguagePreferenceStore(create_async_redis_client())
    else:
        preference_store = MemoryLanguagePreferenceStore()
    return LocaleResolver(preference_store)


def _warn_memory_outside_dev(component: str) -> None:
    environment = get_base_settings().environment
    if environment != "development":
        logger.warning(
            "memory_store_in_non_dev",
            extra={"component": component, "environment": environment},
        )


# ──────────────────────────────────────────────────────────────────────────────
# Colaboradores HTTP
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_discord_client() -> DiscordHttpClient:
    return create_discord_http_client()


@lru_cache(maxsize=1)
def get_preset_api() -> HttpPresetApi | None:
    """Cliente da API de presets, ou None se não configurada."""
    settings = get_preset_api_settings()
    if not settings.enabled:
        logger.warning("preset_api_not_configured")
        return None
    return create_preset_api(settings)


# ──────────────────────────────────────────────────────────────────────────────
# Dispatcher
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_routes() -> RouteTables:
    return build_default_routes()


@lru_cache(maxsize=1)
def get_handler_services() -> HandlerServices:
    discord = get_discord_settings()
    routes = get_routes()
    return HandlerServices(
        discord_client=get_discord_client(),
        preset_api=get_preset_api(),
        analytics=get_analytics_store(),
        moderator_ids=frozenset(discord.moderator_ids),
        stats_authorized_users=frozenset(discord.stats_authorized_users),
        moderation_channel_id=discord.moderation_channel_id,
        submission_log_channel_id=discord.submission_log_channel_id,
        service_name=get_base_settings().service_name,
        command_names=routes.commands.names(),
    )


@lru_cache(maxsize=1)
def get_dispatcher() -> InteractionDispatcher:
    """Dispatcher com rotas validadas no startup.

    Raises:
        ValueError: Tabela de prefixos ambígua
    """
    routes = get_routes()
    analytics = get_analytics_store()
    dispatcher = InteractionDispatcher(
        commands=routes.commands,
        components=routes.components,
        modals=routes.modals,
        autocomplete=routes.autocomplete,
        task_handle=get_task_handle(),
        services=get_handler_services(),
        rate_limiter=get_rate_limiter(),
        analytics=analytics,
        locale_resolver=get_locale_resolver(),
    )
    logger.info(
        "dispatcher_created",
        extra={
            "commands": list(routes.commands.names()),
            "component_prefixes": list(routes.components.prefixes),
        },
    )
    return dispatcher


def reset_dependencies() -> None:
    """Limpa todos os singletons (uso em testes)."""
    for factory in (
        get_task_handle,
        get_request_guard,
        get_webhook_authenticator,
        get_budget_factory,
        get_rate_limiter,
        get_analytics_store,
        get_locale_resolver,
        get_discord_client,
        get_preset_api,
        get_routes,
        get_handler_services,
        get_dispatcher,
        create_async_redis_client,
    ):
        factory.cache_clear()


__all__ = [
    "get_analytics_store",
    "get_budget_factory",
    "get_discord_client",
    "get_dispatcher",
    "get_handler_services",
    "get_locale_resolver",
    "get_preset_api",
    "get_rate_limiter",
    "get_request_guard",
    "get_routes",
    "get_task_handle",
    "get_webhook_authenticator",
    "reset_dependencies",
]
