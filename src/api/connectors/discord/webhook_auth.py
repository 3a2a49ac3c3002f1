"""Autenticação do webhook interno por Bearer secret."""

from __future__ import annotations

import logging

from app.infra.crypto import timing_safe_equal

logger = logging.getLogger(__name__)


class WebhookAuthenticator:
    """Compara `Authorization: Bearer <secret>` em tempo constante.

    Secret vazio no construtor rejeita qualquer request.
    """

    def __init__(self, secret: str) -> None:
        self._expected = f"Bearer {secret}" if secret else ""

    @property
    def configured(self) -> bool:
        return bool(self._expected)

    def authenticate(self, authorization_header: str | None) -> bool:
        if not self._expected:
            logger.error("internal_webhook_secret_not_configured")
            return False
        return timing_safe_equal(authorization_header or "", self._expected)


__all__ = ["WebhookAuthenticator"]
