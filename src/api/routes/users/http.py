"""Endpoints HTTP de gestão de usuários (token no header Authorization).

Endpoints:
- POST /admin/users/create
- POST /admin/users/update
- POST /admin/users/delete

Corpo `{"data": {...}}`. Sucesso: `{"success": true, ...}`.
Erro: `{"error": {"code", "message"}}` com status mapeado do código.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.routes.users.envelope import parse_request_data
from app.bootstrap import get_http_orchestrator
from app.observability import CORRELATION_HEADER, correlation_scope
from app.services.error_translator import http_status_for, to_http_error_body, to_success_body
from app.use_cases.users import UserLifecycleOrchestrator

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.domain.operation_result import UserOperationResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create")
async def http_create_user(
    request: Request,
    orchestrator: UserLifecycleOrchestrator = Depends(get_http_orchestrator),
) -> JSONResponse:
    """Cria usuário (identidade + perfil)."""
    return await _handle(request, orchestrator.create_user)


@router.post("/update")
async def http_update_user(
    request: Request,
    orchestrator: UserLifecycleOrchestrator = Depends(get_http_orchestrator),
) -> JSONResponse:
    """Atualiza perfil e identidade do usuário."""
    return await _handle(request, orchestrator.update_user)


@router.post("/delete")
async def http_delete_user(
    request: Request,
    orchestrator: UserLifecycleOrchestrator = Depends(get_http_orchestrator),
) -> JSONResponse:
    """Remove identidade e perfil do usuário."""
    return await _handle(request, orchestrator.delete_user)


async def _handle(
    request: Request,
    operation: Callable[[Any, Any], Awaitable[UserOperationResult]],
) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        data = parse_request_data(await request.body())
        result = await operation(request.headers.get("authorization"), data)
        if result.success:
            return JSONResponse(content=to_success_body(result), status_code=200)
        return JSONResponse(
            content=to_http_error_body(result),
            status_code=http_status_for(result.error_code),
        )
