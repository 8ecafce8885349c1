"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.user import UserProfile
from app.protocols.profile_store import ProfileNotFoundError, ProfileStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from app.domain.user import ProfileUpdate


class MemoryProfileStore(ProfileStoreProtocol):
    """Store de perfis em memória — apenas para dev/test.

    `fail_on` aceita nomes de operação ("get", "put", "update", "delete")
    que passam a falhar como indisponibilidade do Firestore.
    """

    def __init__(self) -> None:
        self._profiles: dict[str, UserProfile] = {}
        self.fail_on: set[str] = set()

    def _check_failure(self, operation: str) -> None:
        if operation in self.fail_on:
            raise FirestoreUnavailableError(f"{operation} indisponível")

    async def get(self, account_id: str) -> UserProfile | None:
        self._check_failure("get")
        profile = self._profiles.get(account_id)
        return profile.model_copy(deep=True) if profile is not None else None

    async def put(self, account_id: str, profile: UserProfile) -> None:
        self._check_failure("put")
        self._profiles[account_id] = profile.model_copy(deep=True)

    async def update(self, account_id: str, changes: ProfileUpdate) -> None:
        self._check_failure("update")
        current = self._profiles.get(account_id)
        if current is None:
            raise ProfileNotFoundError(account_id)
        self._profiles[account_id] = current.model_copy(update=changes.to_firestore_dict())

    async def delete(self, account_id: str) -> None:
        self._check_failure("delete")
        self._profiles.pop(account_id, None)

    def seed(self, account_id: str, profile: UserProfile) -> None:
        """Insere perfil sem passar pela injeção de falhas (setup de testes)."""
        self._profiles[account_id] = profile.model_copy(deep=True)

    def account_ids(self) -> set[str]:
        """Ids com perfil (apenas para testes)."""
        return set(self._profiles)
