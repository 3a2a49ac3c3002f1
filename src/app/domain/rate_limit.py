"""Decisões de rate limit por usuário e comando."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_COMMAND_LIMIT = 15
RATE_LIMIT_WINDOW_SECONDS = 60

# Comandos com custo maior têm limites menores por janela
COMMAND_LIMITS: dict[str, int] = {
    "match_image": 5,
    "accessibility": 10,
    "harmony": 15,
    "match": 15,
    "mixer": 15,
    "comparison": 15,
    "dye": 20,
    "favorites": 20,
    "collection": 20,
    "language": 20,
    "about": 30,
    "manual": 30,
}

RATE_LIMIT_EXEMPT_COMMANDS: frozenset[str] = frozenset({"about", "manual", "stats"})


def limit_for_command(command: str) -> int:
    return COMMAND_LIMITS.get(command, DEFAULT_COMMAND_LIMIT)


class RateLimitDecision(BaseModel):
    """Decisão devolvida pelo rate limiter."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    allowed: bool = Field(..., description="Se a invocação pode prosseguir")
    retry_after_seconds: int = Field(0, ge=0, description="Espera sugerida")
    limit: int = Field(DEFAULT_COMMAND_LIMIT, description="Limite na janela")
    remaining: int = Field(0, ge=0, description="Invocações restantes")
    backend_error: bool = Field(
        False, description="True quando a decisão veio do fail-open"
    )

    @classmethod
    def fail_open(cls, limit: int) -> RateLimitDecision:
        return cls(allowed=True, limit=limit, remaining=limit, backend_error=True)


def rate_limited_message(retry_after_seconds: int) -> str:
    seconds = max(1, retry_after_seconds)
    unit = "second" if seconds == 1 else "seconds"
    return (
        "You're using this command too quickly! "
        f"Please wait **{seconds} {unit}** before trying again."
    )


__all__ = [
    "COMMAND_LIMITS",
    "DEFAULT_COMMAND_LIMIT",
    "RATE_LIMIT_EXEMPT_COMMANDS",
    "RATE_LIMIT_WINDOW_SECONDS",
    "RateLimitDecision",
    "limit_for_command",
    "rate_limited_message",
]
