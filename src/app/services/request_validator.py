"""Validação dos payloads de CreateUser/UpdateUser/DeleteUser.

Converte erros do pydantic em ValidationError com a lista de campos
ausentes ou inválidos, sem ecoar valores recebidos.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.domain.user_requests import CreateUserRequest, DeleteUserRequest, UpdateUserRequest
from app.protocols.validator import UserRequestValidatorProtocol, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class UserRequestValidator(UserRequestValidatorProtocol):
    """Valida campos obrigatórios e tipos por operação."""

    def validate_create(self, data: Any) -> CreateUserRequest:
        return _validate(CreateUserRequest, data)

    def validate_update(self, data: Any) -> UpdateUserRequest:
        return _validate(UpdateUserRequest, data)

    def validate_delete(self, data: Any) -> DeleteUserRequest:
        return _validate(DeleteUserRequest, data)


def _validate(model: type[ModelT], data: Any) -> ModelT:
    payload = dict(data) if isinstance(data, Mapping) else {}
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        fields = tuple(
            dict.fromkeys(str(error["loc"][0]) for error in exc.errors() if error["loc"])
        )
        raise ValidationError(
            f"Campos obrigatórios ausentes ou inválidos: {', '.join(fields)}.",
            fields,
        ) from None
