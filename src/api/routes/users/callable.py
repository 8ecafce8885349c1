"""Endpoints no protocolo de funções chamáveis (auth no contexto da chamada).

Endpoints:
- POST /callable/createUser
- POST /callable/updateUser
- POST /callable/deleteUser

O token do header é resolvido em CallContext antes do handler, como faz o
runtime de funções chamáveis. Sucesso: `{"result": {...}}`.
Erro: `{"error": {"status", "message"}}`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.routes.users.envelope import parse_request_data
from app.bootstrap import get_callable_orchestrator, get_identity_provider
from app.domain.operation_result import ErrorKind, UserOperationResult
from app.domain.user import AuthContext, CallContext
from app.observability import CORRELATION_HEADER, correlation_scope
from app.protocols.token_verifier import InvalidTokenError
from app.services.authorization_guard import extract_bearer_token
from app.services.backend_calls import bounded_call
from app.services.error_translator import (
    http_status_for,
    to_callable_error_body,
    to_success_body,
)
from app.use_cases.users import UserLifecycleOrchestrator
from app.use_cases.users.lifecycle_orchestrator import MSG_INTERNAL
from config.settings import get_access_settings
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.protocols.token_verifier import TokenVerifierProtocol

logger = logging.getLogger(__name__)

router = APIRouter()


async def resolve_call_context(
    authorization: str | None,
    verifier: TokenVerifierProtocol,
    *,
    timeout_seconds: float,
) -> CallContext:
    """Converte o header Authorization em CallContext.

    Token inválido resulta em contexto sem auth; o guard decide a resposta.
    Falhas de infraestrutura propagam.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return CallContext()
    try:
        uid = await bounded_call(
            verifier.verify_token(token),
            operation="verify_token",
            timeout_seconds=timeout_seconds,
        )
    except InvalidTokenError:
        logger.info("callable_token_rejected", extra={"component": "callable_runtime"})
        return CallContext()
    return CallContext(auth=AuthContext(uid=uid))


@router.post("/createUser")
async def callable_create_user(
    request: Request,
    orchestrator: UserLifecycleOrchestrator = Depends(get_callable_orchestrator),
    verifier: Any = Depends(get_identity_provider),
) -> JSONResponse:
    """Cria usuário (identidade + perfil)."""
    return await _handle(request, verifier, orchestrator.create_user)


@router.post("/updateUser")
async def callable_update_user(
    request: Request,
    orchestrator: UserLifecycleOrchestrator = Depends(get_callable_orchestrator),
    verifier: Any = Depends(get_identity_provider),
) -> JSONResponse:
    """Atualiza perfil e identidade do usuário."""
    return await _handle(request, verifier, orchestrator.update_user)


@router.post("/deleteUser")
async def callable_delete_user(
    request: Request,
    orchestrator: UserLifecycleOrchestrator = Depends(get_callable_orchestrator),
    verifier: Any = Depends(get_identity_provider),
) -> JSONResponse:
    """Remove identidade e perfil do usuário."""
    return await _handle(request, verifier, orchestrator.delete_user)


async def _handle(
    request: Request,
    verifier: TokenVerifierProtocol,
    operation: Callable[[Any, Any], Awaitable[UserOperationResult]],
) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            context = await resolve_call_context(
                request.headers.get("authorization"),
                verifier,
                timeout_seconds=get_access_settings().call_timeout_seconds,
            )
        except InfrastructureError as exc:
            logger.error(
                "callable_context_failed",
                extra={"component": "callable_runtime", "error_type": type(exc).__name__},
            )
            result = UserOperationResult.failure(ErrorKind.INTERNAL, MSG_INTERNAL)
        else:
            data = parse_request_data(await request.body())
            result = await operation(context, data)

        if result.success:
            return JSONResponse(content={"result": to_success_body(result)}, status_code=200)
        return JSONResponse(
            content=to_callable_error_body(result),
            status_code=http_status_for(result.error_code),
        )
