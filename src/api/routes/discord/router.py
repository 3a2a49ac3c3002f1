"""Router agregador de rotas Discord.

Inclui:
- interactions.py: POST / (interações assinadas)
- webhooks.py: POST /webhooks/preset-submission (webhook interno)
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.discord.interactions import router as interactions_router
from api.routes.discord.webhooks import router as webhooks_router

router = APIRouter()

router.include_router(interactions_router)
router.include_router(webhooks_router, prefix="/webhooks")
