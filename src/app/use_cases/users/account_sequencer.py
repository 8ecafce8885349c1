"""Sequenciamento das escritas em identidade e perfil.

Os dois stores não têm transação conjunta. A ordem das chamadas define a
contenção de falhas:

- create: identidade → perfil. Falha no perfil deixa identidade órfã.
- update: perfil → identidade. Falha na identidade deixa o perfil adiantado.
- delete: identidade → perfil. Falha no perfil deixa perfil órfão, mas a
  conta já não autentica.

Nenhuma compensação é tentada. Toda inconsistência é registrada com
log_partial_failure para a reconciliação externa. Nada é re-tentado aqui.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.operation_result import ErrorKind, UserOperationResult
from app.domain.user import ProfileUpdate, UserProfile
from app.protocols.identity_provider import IdentityErrorReason, IdentityProviderError
from app.protocols.profile_store import ProfileNotFoundError
from app.services.backend_calls import bounded_call
from config.logging import log_partial_failure

if TYPE_CHECKING:
    from app.domain.user_requests import (
        CreateUserRequest,
        DeleteUserRequest,
        UpdateUserRequest,
    )
    from app.protocols.identity_provider import IdentityProviderProtocol
    from app.protocols.profile_store import ProfileStoreProtocol

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

MSG_EMAIL_EXISTS = "Este e-mail já está cadastrado."
MSG_INVALID_PASSWORD = "A senha não atende aos requisitos."
MSG_INVALID_EMAIL = "O e-mail informado é inválido."
MSG_USER_NOT_FOUND = "Usuário não encontrado."
MSG_CREATE_FAILED = "Erro ao criar usuário."
MSG_UPDATE_FAILED = "Erro ao atualizar usuário."
MSG_DELETE_FAILED = "Erro ao excluir usuário."


class UserAccountSequencer:
    """Executa o pipeline de duas etapas de cada operação, estritamente em ordem."""

    def __init__(
        self,
        identity_provider: IdentityProviderProtocol,
        profile_store: ProfileStoreProtocol,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._identity = identity_provider
        self._profiles = profile_store
        self._timeout_seconds = timeout_seconds

    async def create(self, request: CreateUserRequest) -> UserOperationResult:
        """Cria identidade e depois o perfil com o mesmo id."""
        try:
            account_id = await bounded_call(
                self._identity.create_account(request.email, request.password, request.name),
                operation="identity_create",
                timeout_seconds=self._timeout_seconds,
            )
        except IdentityProviderError as exc:
            return _identity_failure("create_user", exc, MSG_CREATE_FAILED)
        except Exception as exc:
            _log_step_failed("create_user", "identity_create", exc)
            return UserOperationResult.failure(ErrorKind.INTERNAL, MSG_CREATE_FAILED)

        profile = UserProfile(
            email=request.email,
            name=request.name,
            role=request.role,
            title=request.title,
            communities=list(request.communities),
        )
        try:
            await bounded_call(
                self._profiles.put(account_id, profile),
                operation="profile_put",
                timeout_seconds=self._timeout_seconds,
            )
        except Exception as exc:
            log_partial_failure(
                logger,
                "create_user",
                "orphaned_identity",
                account_id,
                step="profile_put",
                error_type=type(exc).__name__,
            )
            return UserOperationResult.failure(ErrorKind.INTERNAL, MSG_CREATE_FAILED)

        logger.info("user_created", extra={"component": "user_lifecycle", "account_id": account_id})
        return UserOperationResult.ok(account_id)

    async def update(self, request: UpdateUserRequest) -> UserOperationResult:
        """Atualiza o perfil e depois displayName/senha na identidade."""
        changes = ProfileUpdate(
            name=request.name,
            role=request.role,
            title=request.title,
            communities=list(request.communities),
        )
        try:
            await bounded_call(
                self._profiles.update(request.uid, changes),
                operation="profile_update",
                timeout_seconds=self._timeout_seconds,
            )
        except ProfileNotFoundError:
            return UserOperationResult.failure(ErrorKind.NOT_FOUND, MSG_USER_NOT_FOUND)
        except Exception as exc:
            _log_step_failed("update_user", "profile_update", exc, request.uid)
            return UserOperationResult.failure(ErrorKind.INTERNAL, MSG_UPDATE_FAILED)

        try:
            await bounded_call(
                self._identity.update_account(
                    request.uid,
                    display_name=request.name,
                    password=request.password,
                ),
                operation="identity_update",
                timeout_seconds=self._timeout_seconds,
            )
        except Exception as exc:
            log_partial_failure(
                logger,
                "update_user",
                "partial_update",
                request.uid,
                step="identity_update",
                error_type=type(exc).__name__,
            )
            if isinstance(exc, IdentityProviderError):
                return _identity_failure("update_user", exc, MSG_UPDATE_FAILED)
            return UserOperationResult.failure(ErrorKind.INTERNAL, MSG_UPDATE_FAILED)

        logger.info(
            "user_updated",
            extra={
                "component": "user_lifecycle",
                "account_id": request.uid,
                "password_changed": request.password is not None,
            },
        )
        return UserOperationResult.ok()

    async def delete(self, request: DeleteUserRequest) -> UserOperationResult:
        """Remove a identidade e depois o perfil."""
        try:
            await bounded_call(
                self._identity.delete_account(request.uid),
                operation="identity_delete",
                timeout_seconds=self._timeout_seconds,
            )
        except IdentityProviderError as exc:
            return _identity_failure("delete_user", exc, MSG_DELETE_FAILED)
        except Exception as exc:
            _log_step_failed("delete_user", "identity_delete", exc, request.uid)
            return UserOperationResult.failure(ErrorKind.INTERNAL, MSG_DELETE_FAILED)

        try:
            await bounded_call(
                self._profiles.delete(request.uid),
                operation="profile_delete",
                timeout_seconds=self._timeout_seconds,
            )
        except Exception as exc:
            log_partial_failure(
                logger,
                "delete_user",
                "orphaned_profile",
                request.uid,
                step="profile_delete",
                error_type=type(exc).__name__,
            )
            return UserOperationResult.failure(ErrorKind.INTERNAL, MSG_DELETE_FAILED)

        logger.info("user_deleted", extra={"component": "user_lifecycle", "account_id": request.uid})
        return UserOperationResult.ok()


def _identity_failure(
    operation: str,
    exc: IdentityProviderError,
    fallback_message: str,
) -> UserOperationResult:
    """Mapeia o motivo do provedor de identidade para ErrorKind."""
    reason = exc.reason
    if reason is IdentityErrorReason.EMAIL_ALREADY_EXISTS:
        return UserOperationResult.failure(ErrorKind.ALREADY_EXISTS, MSG_EMAIL_EXISTS)
    if reason is IdentityErrorReason.INVALID_PASSWORD:
        return UserOperationResult.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_PASSWORD)
    if reason is IdentityErrorReason.INVALID_EMAIL:
        return UserOperationResult.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_EMAIL)
    if reason is IdentityErrorReason.ACCOUNT_NOT_FOUND:
        return UserOperationResult.failure(ErrorKind.NOT_FOUND, MSG_USER_NOT_FOUND)

    logger.error(
        "identity_provider_failed",
        extra={"component": "user_lifecycle", "operation": operation, "reason": reason.value},
    )
    return UserOperationResult.failure(ErrorKind.INTERNAL, fallback_message)


def _log_step_failed(
    operation: str,
    step: str,
    exc: Exception,
    account_id: str | None = None,
) -> None:
    logger.error(
        "user_operation_step_failed",
        extra={
            "component": "user_lifecycle",
            "operation": operation,
            "failed_step": step,
            "account_id": account_id,
            "error_type": type(exc).__name__,
        },
    )
