"""Protocolo de validação dos requests de gestão de usuários."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.user_requests import (
        CreateUserRequest,
        DeleteUserRequest,
        UpdateUserRequest,
    )


class ValidationError(Exception):
    """Campos obrigatórios ausentes ou com tipo inválido."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class UserRequestValidatorProtocol(Protocol):
    """Contrato mínimo para validação dos payloads de gestão de usuários."""

    def validate_create(self, data: Any) -> CreateUserRequest: ...

    def validate_update(self, data: Any) -> UpdateUserRequest: ...

    def validate_delete(self, data: Any) -> DeleteUserRequest: ...
