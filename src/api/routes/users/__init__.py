"""Rotas de gestão de usuários (variante HTTP e variante chamável)."""

from __future__ import annotations

from api.routes.users.callable import router as callable_router
from api.routes.users.http import router as http_router

__all__ = [
    "callable_router",
    "http_router",
]
