"""Contrato do profile store (atributos de negócio por id de conta)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.user import ProfileUpdate, UserProfile


class ProfileNotFoundError(LookupError):
    """Perfil inexistente para o id informado."""

    def __init__(self, account_id: str) -> None:
        super().__init__(f"Perfil não encontrado: {account_id}")
        self.account_id = account_id


@runtime_checkable
class ProfileStoreProtocol(Protocol):
    """Contrato para store de UserProfile.

    Falhas de transporte levantam FirestoreUnavailableError (utils.errors).
    """

    async def get(self, account_id: str) -> UserProfile | None:
        """Busca perfil; None se não existir."""
        ...

    async def put(self, account_id: str, profile: UserProfile) -> None:
        """Cria ou sobrescreve o perfil inteiro."""
        ...

    async def update(self, account_id: str, changes: ProfileUpdate) -> None:
        """Atualiza perfil existente; ProfileNotFoundError se ausente."""
        ...

    async def delete(self, account_id: str) -> None:
        """Remove o perfil (idempotente)."""
        ...
