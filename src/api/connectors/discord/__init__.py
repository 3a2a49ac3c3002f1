"""Conector Discord - adapter de borda para o endpoint de interações.

Este módulo é o único ponto de IO com o Discord.
Responsabilidades:
- Verificação de requests (tamanho, headers, Ed25519)
- Autenticação do webhook interno (Bearer secret)
- Parse do envelope de interação
- HTTP client para follow-ups e mensagens de canal
"""

from .http_client import DiscordHttpClient, create_discord_http_client
from .signature import RequestGuard, VerificationResult
from .webhook_auth import WebhookAuthenticator

__all__ = [
    "DiscordHttpClient",
    "RequestGuard",
    "VerificationResult",
    "WebhookAuthenticator",
    "create_discord_http_client",
]
