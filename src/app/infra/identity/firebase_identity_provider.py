"""Provedor de identidade sobre o Firebase Admin SDK (Auth).

O SDK é bloqueante; cada chamada roda em `asyncio.to_thread`. Erros do SDK
são convertidos em IdentityProviderError / InvalidTokenError sem expor
detalhes internos ao chamador.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from firebase_admin import auth
from firebase_admin import exceptions as firebase_exceptions

from app.domain.user import IdentityRecord
from app.protocols.identity_provider import (
    IdentityErrorReason,
    IdentityProviderError,
    IdentityProviderProtocol,
)
from app.protocols.token_verifier import InvalidTokenError, TokenVerifierProtocol

if TYPE_CHECKING:
    import firebase_admin

logger = logging.getLogger(__name__)

_COMPONENT = "firebase_identity_provider"


class FirebaseIdentityProvider(IdentityProviderProtocol, TokenVerifierProtocol):
    """Contas e verificação de ID tokens via `firebase_admin.auth`."""

    __slots__ = ("_app", "_check_revoked")

    def __init__(
        self,
        app: firebase_admin.App | None = None,
        *,
        check_revoked: bool = True,
    ) -> None:
        self._app = app
        self._check_revoked = check_revoked

    async def verify_token(self, token: str) -> str:
        return await asyncio.to_thread(self._verify_token_sync, token)

    def _verify_token_sync(self, token: str) -> str:
        try:
            decoded = auth.verify_id_token(token, app=self._app, check_revoked=self._check_revoked)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            # Expirado, revogado, malformado, usuário desabilitado ou certificados
            # indisponíveis: tudo vira credencial inválida para o chamador.
            logger.info(
                "id_token_verification_failed",
                extra={"component": _COMPONENT, "error_type": type(exc).__name__},
            )
            raise InvalidTokenError from None
        uid = decoded.get("uid") if isinstance(decoded, dict) else None
        if not uid:
            raise InvalidTokenError
        return str(uid)

    async def create_account(self, email: str, password: str, display_name: str) -> str:
        return await asyncio.to_thread(self._create_account_sync, email, password, display_name)

    def _create_account_sync(self, email: str, password: str, display_name: str) -> str:
        try:
            record = auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                app=self._app,
            )
        except auth.EmailAlreadyExistsError as exc:
            raise IdentityProviderError(IdentityErrorReason.EMAIL_ALREADY_EXISTS) from exc
        except (ValueError, firebase_exceptions.InvalidArgumentError) as exc:
            raise IdentityProviderError(_rejected_input_reason(exc)) from exc
        except firebase_exceptions.FirebaseError as exc:
            self._log_error("create_account", exc)
            raise IdentityProviderError(IdentityErrorReason.PROVIDER_ERROR) from exc
        return str(record.uid)

    async def update_account(
        self,
        account_id: str,
        *,
        display_name: str,
        password: str | None = None,
    ) -> None:
        await asyncio.to_thread(self._update_account_sync, account_id, display_name, password)

    def _update_account_sync(
        self,
        account_id: str,
        display_name: str,
        password: str | None,
    ) -> None:
        updates: dict[str, Any] = {"display_name": display_name}
        if password:
            updates["password"] = password
        try:
            auth.update_user(account_id, app=self._app, **updates)
        except auth.UserNotFoundError as exc:
            raise IdentityProviderError(IdentityErrorReason.ACCOUNT_NOT_FOUND) from exc
        except (ValueError, firebase_exceptions.InvalidArgumentError) as exc:
            raise IdentityProviderError(_rejected_input_reason(exc, account_id=account_id)) from exc
        except firebase_exceptions.FirebaseError as exc:
            self._log_error("update_account", exc)
            raise IdentityProviderError(IdentityErrorReason.PROVIDER_ERROR) from exc

    async def delete_account(self, account_id: str) -> None:
        await asyncio.to_thread(self._delete_account_sync, account_id)

    def _delete_account_sync(self, account_id: str) -> None:
        try:
            auth.delete_user(account_id, app=self._app)
        except auth.UserNotFoundError as exc:
            raise IdentityProviderError(IdentityErrorReason.ACCOUNT_NOT_FOUND) from exc
        except ValueError as exc:
            # uid malformado nunca existiu no provedor
            raise IdentityProviderError(IdentityErrorReason.ACCOUNT_NOT_FOUND) from exc
        except firebase_exceptions.FirebaseError as exc:
            self._log_error("delete_account", exc)
            raise IdentityProviderError(IdentityErrorReason.PROVIDER_ERROR) from exc

    async def get_account(self, account_id: str) -> IdentityRecord | None:
        return await asyncio.to_thread(self._get_account_sync, account_id)

    def _get_account_sync(self, account_id: str) -> IdentityRecord | None:
        try:
            record = auth.get_user(account_id, app=self._app)
        except (auth.UserNotFoundError, ValueError):
            return None
        except firebase_exceptions.FirebaseError as exc:
            self._log_error("get_account", exc)
            raise IdentityProviderError(IdentityErrorReason.PROVIDER_ERROR) from exc
        return IdentityRecord(
            account_id=str(record.uid),
            email=record.email or "",
            display_name=record.display_name or "",
            disabled=bool(record.disabled),
        )

    def _log_error(self, action: str, exc: Exception) -> None:
        logger.error(
            "identity_provider_call_failed",
            extra={
                "component": _COMPONENT,
                "action": action,
                "error_type": type(exc).__name__,
                "error_code": getattr(exc, "code", None),
            },
        )


def _rejected_input_reason(
    exc: Exception,
    *,
    account_id: str | None = None,
) -> IdentityErrorReason:
    """Classifica rejeição de entrada pelo texto do SDK (senha, e-mail ou uid)."""
    text = str(exc).lower()
    if "password" in text:
        return IdentityErrorReason.INVALID_PASSWORD
    if "email" in text:
        return IdentityErrorReason.INVALID_EMAIL
    if account_id is not None and "uid" in text:
        return IdentityErrorReason.ACCOUNT_NOT_FOUND
    return IdentityErrorReason.PROVIDER_ERROR
