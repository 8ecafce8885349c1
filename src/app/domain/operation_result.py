"""Resultado das operações de ciclo de vida de usuário.

Toda operação do orquestrador devolve `UserOperationResult`; exceções não
atravessam essa fronteira. `error_code` pertence a um conjunto fechado.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Taxonomia fechada de erros (valores estáveis expostos no wire)."""

    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_DENIED = "permission-denied"
    INVALID_ARGUMENT = "invalid-argument"
    ALREADY_EXISTS = "already-exists"
    NOT_FOUND = "not-found"
    INTERNAL = "internal"


@dataclass(frozen=True, slots=True)
class UserOperationResult:
    """Sucesso (com account_id em CreateUser) ou falha tipada."""

    success: bool
    account_id: str | None = None
    error_code: ErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, account_id: str | None = None) -> UserOperationResult:
        return cls(success=True, account_id=account_id)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> UserOperationResult:
        return cls(success=False, error_code=kind, error_message=message)
