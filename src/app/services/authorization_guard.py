"""Guards de autorização de administrador.

Duas estratégias com a mesma checagem de papel:
- BearerTokenAuthorizationGuard: token no header `Authorization: Bearer`.
- CallContextAuthorizationGuard: auth já resolvido no contexto da chamada.

Nenhum estado é mantido entre requests; a checagem roda a cada chamada.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from app.domain.operation_result import ErrorKind
from app.domain.user import Caller
from app.protocols.authorization import AuthorizationError, AuthorizationGuardProtocol
from app.protocols.token_verifier import InvalidTokenError
from app.services.backend_calls import bounded_call

if TYPE_CHECKING:
    from app.domain.user import CallContext
    from app.protocols.profile_store import ProfileStoreProtocol
    from app.protocols.token_verifier import TokenVerifierProtocol

logger = logging.getLogger(__name__)

_BEARER_PATTERN = re.compile(r"^Bearer\s+(.*)$", re.IGNORECASE)

MSG_LOGIN_REQUIRED = "Esta operação requer autenticação. Faça login primeiro."
MSG_MISSING_BEARER = "Token Authorization Bearer ausente."
MSG_TOKEN_REJECTED = "Falha na verificação do token."
MSG_NOT_ADMIN = "Permissão insuficiente: apenas administradores podem executar esta operação."


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extrai o token de um header Authorization; None se ausente/vazio."""
    if not authorization:
        return None
    match = _BEARER_PATTERN.match(authorization.strip())
    if match is None:
        return None
    token = match.group(1).strip()
    return token or None


class _AdminRoleGuard:
    """Checagem comum: perfil existe e `role` é o sentinela de administrador."""

    def __init__(
        self,
        profile_store: ProfileStoreProtocol,
        *,
        admin_role: str,
        timeout_seconds: float,
    ) -> None:
        self._profile_store = profile_store
        self._admin_role = admin_role
        self._timeout_seconds = timeout_seconds

    async def _require_admin(self, caller_id: str) -> Caller:
        profile = await bounded_call(
            self._profile_store.get(caller_id),
            operation="profile_get",
            timeout_seconds=self._timeout_seconds,
        )
        if profile is None or not profile.is_admin(self._admin_role):
            logger.warning(
                "admin_check_denied",
                extra={
                    "component": "authorization_guard",
                    "caller_id": caller_id,
                    "profile_found": profile is not None,
                },
            )
            raise AuthorizationError(ErrorKind.PERMISSION_DENIED, MSG_NOT_ADMIN)
        return Caller(id=caller_id)


class BearerTokenAuthorizationGuard(_AdminRoleGuard, AuthorizationGuardProtocol):
    """Autoriza a partir do valor bruto do header Authorization."""

    def __init__(
        self,
        verifier: TokenVerifierProtocol,
        profile_store: ProfileStoreProtocol,
        *,
        admin_role: str,
        timeout_seconds: float,
    ) -> None:
        super().__init__(profile_store, admin_role=admin_role, timeout_seconds=timeout_seconds)
        self._verifier = verifier

    async def authorize(self, credential: str | None) -> Caller:
        token = extract_bearer_token(credential)
        if token is None:
            raise AuthorizationError(ErrorKind.UNAUTHENTICATED, MSG_MISSING_BEARER)
        try:
            caller_id = await bounded_call(
                self._verifier.verify_token(token),
                operation="verify_token",
                timeout_seconds=self._timeout_seconds,
            )
        except InvalidTokenError:
            logger.info(
                "token_rejected",
                extra={"component": "authorization_guard", "strategy": "bearer_header"},
            )
            raise AuthorizationError(ErrorKind.UNAUTHENTICATED, MSG_TOKEN_REJECTED) from None
        return await self._require_admin(caller_id)


class CallContextAuthorizationGuard(_AdminRoleGuard, AuthorizationGuardProtocol):
    """Autoriza a partir de um CallContext resolvido pelo runtime."""

    async def authorize(self, credential: CallContext | None) -> Caller:
        auth = credential.auth if credential is not None else None
        if auth is None or not auth.uid:
            raise AuthorizationError(ErrorKind.UNAUTHENTICATED, MSG_LOGIN_REQUIRED)
        return await self._require_admin(auth.uid)
