"""Firestore Profile Store — perfis de usuário indexados pelo uid."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from google.api_core import exceptions as gcp_exceptions

from app.domain.user import UserProfile
from app.protocols.profile_store import ProfileNotFoundError, ProfileStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from google.cloud.firestore import DocumentReference

    from app.domain.user import ProfileUpdate

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


class FirestoreProfileStore(ProfileStoreProtocol):
    """Store de UserProfile usando Firestore.

    Características:
        - put sobrescreve o documento inteiro (sem merge)
        - update falha se o documento não existir (nunca cria)
        - delete é idempotente

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: users)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = USERS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def _document(self, account_id: str) -> DocumentReference:
        return self._db.collection(self._collection).document(account_id)

    async def get(self, account_id: str) -> UserProfile | None:
        return await asyncio.to_thread(self._get_sync, account_id)

    def _get_sync(self, account_id: str) -> UserProfile | None:
        try:
            doc = self._document(account_id).get()
        except ValueError:
            # id com caractere inválido para path de documento
            return None
        except gcp_exceptions.GoogleAPIError as exc:
            self._log_error("get", exc)
            raise FirestoreUnavailableError(str(exc)) from exc
        if not doc.exists:
            return None
        return UserProfile.from_firestore_dict(doc.to_dict() or {})

    async def put(self, account_id: str, profile: UserProfile) -> None:
        await asyncio.to_thread(self._put_sync, account_id, profile)

    def _put_sync(self, account_id: str, profile: UserProfile) -> None:
        try:
            self._document(account_id).set(profile.to_firestore_dict())
        except gcp_exceptions.GoogleAPIError as exc:
            self._log_error("put", exc)
            raise FirestoreUnavailableError(str(exc)) from exc
        logger.debug("user_profile_written")

    async def update(self, account_id: str, changes: ProfileUpdate) -> None:
        await asyncio.to_thread(self._update_sync, account_id, changes)

    def _update_sync(self, account_id: str, changes: ProfileUpdate) -> None:
        try:
            self._document(account_id).update(changes.to_firestore_dict())
        except (gcp_exceptions.NotFound, ValueError) as exc:
            raise ProfileNotFoundError(account_id) from exc
        except gcp_exceptions.GoogleAPIError as exc:
            self._log_error("update", exc)
            raise FirestoreUnavailableError(str(exc)) from exc

    async def delete(self, account_id: str) -> None:
        await asyncio.to_thread(self._delete_sync, account_id)

    def _delete_sync(self, account_id: str) -> None:
        try:
            self._document(account_id).delete()
        except gcp_exceptions.GoogleAPIError as exc:
            self._log_error("delete", exc)
            raise FirestoreUnavailableError(str(exc)) from exc

    def _log_error(self, action: str, exc: Exception) -> None:
        logger.error(
            "user_profile_store_failed",
            extra={
                "component": "firestore_profile_store",
                "action": action,
                "collection": self._collection,
                "error_type": type(exc).__name__,
            },
        )
