"""Agregador de rotas.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.users import callable_router, http_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Gestão de usuários: token no header
    api_router.include_router(http_router, prefix="/admin/users", tags=["users"])

    # Gestão de usuários: protocolo chamável (auth no contexto)
    api_router.include_router(callable_router, prefix="/callable", tags=["users"])

    return api_router
