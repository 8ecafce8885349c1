"""Contrato do provedor de identidade (credenciais e contas de login).

Mantemos apenas o protocolo aqui para permitir troca de provider sem
impactar o orquestrador de ciclo de vida.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.user import IdentityRecord


class IdentityErrorReason(str, Enum):
    """Motivos de falha reportados pelo provedor de identidade."""

    EMAIL_ALREADY_EXISTS = "email_already_exists"
    ACCOUNT_NOT_FOUND = "account_not_found"
    INVALID_PASSWORD = "invalid_password"
    INVALID_EMAIL = "invalid_email"
    PROVIDER_ERROR = "provider_error"


class IdentityProviderError(Exception):
    """Falha de operação no provedor de identidade."""

    def __init__(self, reason: IdentityErrorReason, detail: str = "") -> None:
        super().__init__(detail or reason.value)
        self.reason = reason


@runtime_checkable
class IdentityProviderProtocol(Protocol):
    """Contrato de escrita/leitura de contas no provedor de identidade."""

    async def create_account(self, email: str, password: str, display_name: str) -> str:
        """Cria conta e retorna o id (uid) gerado."""
        ...

    async def update_account(
        self,
        account_id: str,
        *,
        display_name: str,
        password: str | None = None,
    ) -> None:
        """Atualiza displayName e, se informada, a senha."""
        ...

    async def delete_account(self, account_id: str) -> None:
        """Remove a conta; ACCOUNT_NOT_FOUND se não existir."""
        ...

    async def get_account(self, account_id: str) -> IdentityRecord | None:
        """Busca conta por id; None se não existir."""
        ...
