"""Settings específicas de Discord.

Configurações do endpoint de interações (HTTP) e da Discord REST API.
Carregadas uma vez no startup; o código de request recebe os valores
já resolvidos via construtores (RequestGuard, WebhookAuthenticator).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from functools import lru_cache

# Constantes da Discord API
DISCORD_API_VERSION: str = "v10"
DISCORD_API_BASE_URL: str = "https://discord.com/api"

# Limite da plataforma para o ACK é 3000ms; o default deixa margem de rede
PLATFORM_ACK_LIMIT_MS: int = 3000
DEFAULT_ACK_DEADLINE_MS: int = 2800
DEFAULT_FOLLOWUP_DEADLINE_MS: int = 15 * 60 * 1000
DEFAULT_MAX_BODY_BYTES: int = 100 * 1024

_SNOWFLAKE_RE = re.compile(r"^\d{17,19}$")
_PUBLIC_KEY_RE = re.compile(r"^[0-9a-fA-F]{64}$")


def _split_ids(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class DiscordSettings:
    """Configurações do canal Discord.

    Attributes:
        bot_token: Token do bot (chamadas por canal/mensagem)
        public_key: Chave pública Ed25519 da aplicação (hex)
        application_id: ID da aplicação Discord
        internal_webhook_secret: Secret do webhook interno (Bearer)
        moderation_channel_id: Canal de moderação de presets
        submission_log_channel_id: Canal de log de presets publicados
        moderator_ids: IDs autorizados a moderar presets
        stats_authorized_users: IDs autorizados a usar /stats
        api_version: Versão da API
        api_base_url: URL base da API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de erro
        max_body_bytes: Teto do corpo de interações recebidas
        ack_deadline_ms: Janela de ACK síncrono
        followup_deadline_ms: Validade do token para follow-ups
    """

    # Credenciais
    bot_token: str = ""
    public_key: str = ""
    application_id: str = ""
    internal_webhook_secret: str = ""

    # Canais e permissões
    moderation_channel_id: str = ""
    submission_log_channel_id: str = ""
    moderator_ids: tuple[str, ...] = field(default_factory=tuple)
    stats_authorized_users: tuple[str, ...] = field(default_factory=tuple)

    # API
    api_version: str = DISCORD_API_VERSION
    api_base_url: str = DISCORD_API_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 10.0
    max_retries: int = 2

    # Gateway de interações
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    ack_deadline_ms: int = DEFAULT_ACK_DEADLINE_MS
    followup_deadline_ms: int = DEFAULT_FOLLOWUP_DEADLINE_MS

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Discord.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.bot_token.strip():
            errors.append("DISCORD_TOKEN não configurado")

        if not self.public_key.strip():
            errors.append("DISCORD_PUBLIC_KEY não configurado")
        elif not _PUBLIC_KEY_RE.match(self.public_key.strip()):
            errors.append("DISCORD_PUBLIC_KEY deve ter 64 caracteres hex")

        if not self.application_id.strip():
            errors.append("DISCORD_CLIENT_ID não configurado")

        for name, ids in (
            ("MODERATOR_IDS", self.moderator_ids),
            ("STATS_AUTHORIZED_USERS", self.stats_authorized_users),
        ):
            errors.extend(
                f"ID Discord inválido em {name}: {item}"
                for item in ids
                if not _SNOWFLAKE_RE.match(item)
            )

        if self.request_timeout_seconds <= 0:
            errors.append("DISCORD_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("DISCORD_MAX_RETRIES deve ser >= 0")

        if self.max_body_bytes <= 0:
            errors.append("DISCORD_MAX_BODY_BYTES deve ser > 0")

        if not 0 < self.ack_deadline_ms < PLATFORM_ACK_LIMIT_MS:
            errors.append(
                f"DISCORD_ACK_DEADLINE_MS deve estar entre 1 e {PLATFORM_ACK_LIMIT_MS - 1}"
            )

        if self.followup_deadline_ms <= self.ack_deadline_ms:
            errors.append("DISCORD_FOLLOWUP_DEADLINE_MS deve ser maior que o ACK")

        return errors


def _load_from_env() -> DiscordSettings:
    """Carrega DiscordSettings de variáveis de ambiente."""
    return DiscordSettings(
        bot_token=os.getenv("DISCORD_TOKEN", ""),
        public_key=os.getenv("DISCORD_PUBLIC_KEY", ""),
        application_id=os.getenv("DISCORD_CLIENT_ID", ""),
        internal_webhook_secret=os.getenv("INTERNAL_WEBHOOK_SECRET", ""),
        moderation_channel_id=os.getenv("MODERATION_CHANNEL_ID", ""),
        submission_log_channel_id=os.getenv("SUBMISSION_LOG_CHANNEL_ID", ""),
        moderator_ids=_split_ids(os.getenv("MODERATOR_IDS", "")),
        stats_authorized_users=_split_ids(os.getenv("STATS_AUTHORIZED_USERS", "")),
        api_version=os.getenv("DISCORD_API_VERSION", DISCORD_API_VERSION),
        api_base_url=os.getenv("DISCORD_API_BASE_URL", DISCORD_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("DISCORD_REQUEST_TIMEOUT_SECONDS", "10")
        ),
        max_retries=int(os.getenv("DISCORD_MAX_RETRIES", "2")),
        max_body_bytes=int(
            os.getenv("DISCORD_MAX_BODY_BYTES", str(DEFAULT_MAX_BODY_BYTES))
        ),
        ack_deadline_ms=int(
            os.getenv("DISCORD_ACK_DEADLINE_MS", str(DEFAULT_ACK_DEADLINE_MS))
        ),
        followup_deadline_ms=int(
            os.getenv("DISCORD_FOLLOWUP_DEADLINE_MS", str(DEFAULT_FOLLOWUP_DEADLINE_MS))
        ),
    )


@lru_cache(maxsize=1)
def get_discord_settings() -> DiscordSettings:
    """Retorna instância cacheada de DiscordSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
