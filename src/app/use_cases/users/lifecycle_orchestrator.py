"""Use case de gestão de usuários restrita a administradores.

Fluxo de cada operação: guard → validação → UserAccountSequencer.
Falhas de guard e validação são terminais e acontecem antes de qualquer
escrita. O resultado é sempre um UserOperationResult.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.domain.operation_result import ErrorKind, UserOperationResult
from app.observability import record_operation
from app.protocols.authorization import AuthorizationError
from app.protocols.validator import ValidationError
from app.services.request_validator import UserRequestValidator
from app.use_cases.users.account_sequencer import DEFAULT_TIMEOUT_SECONDS, UserAccountSequencer
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from pydantic import BaseModel

    from app.protocols.authorization import AuthorizationGuardProtocol
    from app.protocols.identity_provider import IdentityProviderProtocol
    from app.protocols.profile_store import ProfileStoreProtocol
    from app.protocols.validator import UserRequestValidatorProtocol

logger = logging.getLogger(__name__)

MSG_INTERNAL = "Erro interno ao processar a solicitação."


class UserLifecycleOrchestrator:
    """Cria, atualiza e remove usuários nos dois stores.

    Args:
        guard: Estratégia de autorização (header Bearer ou contexto da chamada).
        identity_provider: Provedor de identidade injetado.
        profile_store: Profile store injetado.
        validator: Validador de payload (padrão: UserRequestValidator).
        timeout_seconds: Timeout de cada chamada a backend.
    """

    def __init__(
        self,
        guard: AuthorizationGuardProtocol,
        identity_provider: IdentityProviderProtocol,
        profile_store: ProfileStoreProtocol,
        *,
        validator: UserRequestValidatorProtocol | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._guard = guard
        self._validator = validator or UserRequestValidator()
        self._sequencer = UserAccountSequencer(
            identity_provider,
            profile_store,
            timeout_seconds=timeout_seconds,
        )

    async def create_user(self, credential: Any, data: Any) -> UserOperationResult:
        """CreateUser: retorna account_id em caso de sucesso."""
        return await self._execute(
            "create_user",
            credential,
            data,
            self._validator.validate_create,
            self._sequencer.create,
        )

    async def update_user(self, credential: Any, data: Any) -> UserOperationResult:
        """UpdateUser: `communities` ausente sobrescreve com lista vazia."""
        return await self._execute(
            "update_user",
            credential,
            data,
            self._validator.validate_update,
            self._sequencer.update,
        )

    async def delete_user(self, credential: Any, data: Any) -> UserOperationResult:
        """DeleteUser: remove identidade e perfil."""
        return await self._execute(
            "delete_user",
            credential,
            data,
            self._validator.validate_delete,
            self._sequencer.delete,
        )

    async def _execute(
        self,
        operation: str,
        credential: Any,
        data: Any,
        validate: Callable[[Any], BaseModel],
        apply: Callable[[Any], Awaitable[UserOperationResult]],
    ) -> UserOperationResult:
        started_at = time.perf_counter()
        try:
            result = await self._authorize_and_apply(operation, credential, data, validate, apply)
        except Exception as exc:
            logger.exception(
                "user_operation_unexpected_error",
                extra={"operation": operation, "error_type": type(exc).__name__},
            )
            result = UserOperationResult.failure(ErrorKind.INTERNAL, MSG_INTERNAL)
        record_operation(operation, result, (time.perf_counter() - started_at) * 1000)
        return result

    async def _authorize_and_apply(
        self,
        operation: str,
        credential: Any,
        data: Any,
        validate: Callable[[Any], BaseModel],
        apply: Callable[[Any], Awaitable[UserOperationResult]],
    ) -> UserOperationResult:
        try:
            caller = await self._guard.authorize(credential)
        except AuthorizationError as exc:
            return UserOperationResult.failure(exc.kind, exc.message)
        except InfrastructureError as exc:
            logger.error(
                "authorization_backend_failed",
                extra={"operation": operation, "error_type": type(exc).__name__},
            )
            return UserOperationResult.failure(ErrorKind.INTERNAL, MSG_INTERNAL)

        try:
            request = validate(data)
        except ValidationError as exc:
            return UserOperationResult.failure(ErrorKind.INVALID_ARGUMENT, str(exc))

        logger.info(
            "user_operation_authorized",
            extra={"component": "user_lifecycle", "operation": operation, "caller_id": caller.id},
        )
        return await apply(request)
