"""Router de eventos da plataforma de commerce."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.events.order_status import router as order_status_router

router = APIRouter()
router.include_router(order_status_router)
