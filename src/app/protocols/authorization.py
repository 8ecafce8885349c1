"""Contrato do guard de autorização de administrador."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.operation_result import ErrorKind
    from app.domain.user import Caller


class AuthorizationError(Exception):
    """Chamador não autenticado ou sem papel de administrador."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


@runtime_checkable
class AuthorizationGuardProtocol(Protocol):
    """Resolve a credencial (header ou contexto) em um Caller administrador."""

    async def authorize(self, credential: Any) -> Caller:
        """Retorna o Caller ou levanta AuthorizationError."""
        ...
