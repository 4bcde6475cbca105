"""Router principal da Zadarma — agrega os endpoints do canal."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.zadarma.webhook import router as webhook_router

router = APIRouter()

# Webhook endpoints (GET para zd_echo, POST para eventos)
router.include_router(webhook_router)
