"""Agregador de rotas — registra todos os routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.flows.router import router as flows_router
from api.routes.health.router import router as health_router
from api.routes.sessions.router import router as sessions_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Editor de fluxos
    api_router.include_router(flows_router, prefix="/flows", tags=["flows"])

    # Sessões de quiosque
    api_router.include_router(sessions_router, prefix="/sessions", tags=["sessions"])

    return api_router
