"""Provedor de identidade em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import secrets
import uuid

from app.domain.user import IdentityRecord
from app.protocols.identity_provider import (
    IdentityErrorReason,
    IdentityProviderError,
    IdentityProviderProtocol,
)
from app.protocols.token_verifier import InvalidTokenError, TokenVerifierProtocol

# Mesmo mínimo aplicado pelo Firebase Auth
MIN_PASSWORD_LENGTH = 6


class MemoryIdentityProvider(IdentityProviderProtocol, TokenVerifierProtocol):
    """Contas, senhas e tokens em dicionários.

    `fail_on` aceita nomes de operação ("create", "update", "delete",
    "verify") que passam a falhar com PROVIDER_ERROR, para simular
    indisponibilidade.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, IdentityRecord] = {}
        self._passwords: dict[str, str] = {}
        self._tokens: dict[str, str] = {}
        self.fail_on: set[str] = set()

    def issue_token(self, account_id: str) -> str:
        """Emite token opaco para um uid (substitui o login do cliente)."""
        token = secrets.token_urlsafe(24)
        self._tokens[token] = account_id
        return token

    def revoke_token(self, token: str) -> None:
        self._tokens.pop(token, None)

    def seed_account(self, account_id: str, email: str, password: str = "secret123") -> None:
        """Insere conta com id conhecido (ex: administrador de bootstrap)."""
        self._accounts[account_id] = IdentityRecord(account_id=account_id, email=email)
        self._passwords[account_id] = password

    def password_of(self, account_id: str) -> str | None:
        """Senha atual (apenas para asserts de teste)."""
        return self._passwords.get(account_id)

    def _check_failure(self, operation: str) -> None:
        if operation in self.fail_on:
            raise IdentityProviderError(IdentityErrorReason.PROVIDER_ERROR, f"{operation} indisponível")

    async def verify_token(self, token: str) -> str:
        if "verify" in self.fail_on:
            raise InvalidTokenError
        account_id = self._tokens.get(token)
        if account_id is None or account_id not in self._accounts:
            raise InvalidTokenError
        return account_id

    async def create_account(self, email: str, password: str, display_name: str) -> str:
        self._check_failure("create")
        if "@" not in email:
            raise IdentityProviderError(IdentityErrorReason.INVALID_EMAIL)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityProviderError(IdentityErrorReason.INVALID_PASSWORD)
        normalized = email.lower()
        if any(record.email.lower() == normalized for record in self._accounts.values()):
            raise IdentityProviderError(IdentityErrorReason.EMAIL_ALREADY_EXISTS)

        account_id = uuid.uuid4().hex[:28]
        self._accounts[account_id] = IdentityRecord(
            account_id=account_id,
            email=email,
            display_name=display_name,
        )
        self._passwords[account_id] = password
        return account_id

    async def update_account(
        self,
        account_id: str,
        *,
        display_name: str,
        password: str | None = None,
    ) -> None:
        self._check_failure("update")
        record = self._accounts.get(account_id)
        if record is None:
            raise IdentityProviderError(IdentityErrorReason.ACCOUNT_NOT_FOUND)
        if password is not None and len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityProviderError(IdentityErrorReason.INVALID_PASSWORD)

        self._accounts[account_id] = IdentityRecord(
            account_id=account_id,
            email=record.email,
            display_name=display_name,
            disabled=record.disabled,
        )
        if password is not None:
            self._passwords[account_id] = password

    async def delete_account(self, account_id: str) -> None:
        self._check_failure("delete")
        if account_id not in self._accounts:
            raise IdentityProviderError(IdentityErrorReason.ACCOUNT_NOT_FOUND)
        del self._accounts[account_id]
        self._passwords.pop(account_id, None)

    async def get_account(self, account_id: str) -> IdentityRecord | None:
        return self._accounts.get(account_id)
