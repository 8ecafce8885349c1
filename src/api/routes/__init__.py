"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (gestão de usuários, health)
- Ler envelope do request e correlation_id
- Delegação para use_cases
- Respostas HTTP apropriadas

Estrutura:
- routes/users/: endpoints de gestão de usuários (HTTP e chamável)
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
