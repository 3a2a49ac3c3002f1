"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (interações, webhook interno, health)
- Validação inicial de request (tamanho, headers, auth)
- Delegação para connectors/coordinators
- Respostas HTTP apropriadas

Estrutura:
- routes/discord/: interações assinadas e webhook de presets
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
