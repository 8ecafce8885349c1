"""Tradução de ErrorKind para status HTTP e envelopes de resposta.

Funções puras, sem dependência de transporte. Qualquer código
desconhecido cai em 500 / INTERNAL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.operation_result import ErrorKind

if TYPE_CHECKING:
    from app.domain.operation_result import UserOperationResult

DEFAULT_ERROR_MESSAGE = "Ocorreu um erro."

_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.PERMISSION_DENIED: 403,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}

# Status canônicos do protocolo de funções chamáveis
_CALLABLE_STATUS: dict[ErrorKind, str] = {
    ErrorKind.UNAUTHENTICATED: "UNAUTHENTICATED",
    ErrorKind.PERMISSION_DENIED: "PERMISSION_DENIED",
    ErrorKind.INVALID_ARGUMENT: "INVALID_ARGUMENT",
    ErrorKind.ALREADY_EXISTS: "ALREADY_EXISTS",
    ErrorKind.NOT_FOUND: "NOT_FOUND",
    ErrorKind.INTERNAL: "INTERNAL",
}


def _coerce_kind(kind: ErrorKind | str | None) -> ErrorKind:
    if isinstance(kind, ErrorKind):
        return kind
    try:
        return ErrorKind(kind)
    except ValueError:
        return ErrorKind.INTERNAL


def http_status_for(kind: ErrorKind | str | None) -> int:
    """Status HTTP do código de erro."""
    return _HTTP_STATUS[_coerce_kind(kind)]


def callable_status_for(kind: ErrorKind | str | None) -> str:
    """Status canônico (ex: PERMISSION_DENIED) do código de erro."""
    return _CALLABLE_STATUS[_coerce_kind(kind)]


def to_success_body(result: UserOperationResult) -> dict[str, Any]:
    """Corpo de sucesso; CreateUser inclui o id em `uid` e `accountId`."""
    body: dict[str, Any] = {"success": True}
    if result.account_id:
        body["uid"] = result.account_id
        body["accountId"] = result.account_id
    return body


def to_http_error_body(result: UserOperationResult) -> dict[str, Any]:
    """Envelope `{"error": {"code", "message"}}` da variante HTTP."""
    kind = _coerce_kind(result.error_code)
    return {
        "error": {
            "code": kind.value,
            "message": result.error_message or DEFAULT_ERROR_MESSAGE,
        }
    }


def to_callable_error_body(result: UserOperationResult) -> dict[str, Any]:
    """Envelope `{"error": {"status", "message"}}` da variante chamável."""
    return {
        "error": {
            "status": callable_status_for(result.error_code),
            "message": result.error_message or DEFAULT_ERROR_MESSAGE,
        }
    }
