"""Factories de stores, provedores e orquestradores baseadas em configuração."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_firebase_app, create_firestore_client
from app.infra.identity import FirebaseIdentityProvider, MemoryIdentityProvider
from app.infra.stores import FirestoreProfileStore, MemoryProfileStore
from app.services.authorization_guard import (
    BearerTokenAuthorizationGuard,
    CallContextAuthorizationGuard,
)
from app.use_cases.users import UserLifecycleOrchestrator
from config.settings import get_access_settings, get_firestore_settings

if TYPE_CHECKING:
    from app.protocols.authorization import AuthorizationGuardProtocol
    from app.protocols.profile_store import ProfileStoreProtocol

logger = logging.getLogger(__name__)

IdentityProvider = FirebaseIdentityProvider | MemoryIdentityProvider


def _runtime_environment() -> str:
    return os.getenv("ENVIRONMENT", "development").lower()


def _warn_memory_backend(component: str) -> None:
    environment = _runtime_environment()
    if environment not in ("development", "test"):
        logger.warning(
            "memory_backend_in_non_dev",
            extra={"component": component, "backend": "memory", "environment": environment},
        )


def create_identity_provider() -> IdentityProvider:
    """Cria provedor de identidade (também verificador de token)."""
    settings = get_access_settings()
    backend = settings.identity_backend

    if backend == "firebase":
        provider = FirebaseIdentityProvider(
            create_firebase_app(),
            check_revoked=settings.check_revoked_tokens,
        )
        logger.info("identity_provider_created", extra={"backend": "firebase"})
        return provider

    if backend == "memory":
        _warn_memory_backend("identity_provider")
        logger.info("identity_provider_created", extra={"backend": "memory"})
        return MemoryIdentityProvider()

    msg = f"IDENTITY_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_profile_store() -> ProfileStoreProtocol:
    """Cria profile store baseado na configuração."""
    backend = get_access_settings().profile_store_backend

    if backend == "firestore":
        store = FirestoreProfileStore(
            create_firestore_client(),
            collection_name=get_firestore_settings().collection_users,
        )
        logger.info("profile_store_created", extra={"backend": "firestore"})
        return store

    if backend == "memory":
        _warn_memory_backend("profile_store")
        logger.info("profile_store_created", extra={"backend": "memory"})
        return MemoryProfileStore()

    msg = f"PROFILE_STORE_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_bearer_guard(
    identity_provider: IdentityProvider,
    profile_store: ProfileStoreProtocol,
) -> AuthorizationGuardProtocol:
    """Guard para token no header Authorization."""
    settings = get_access_settings()
    return BearerTokenAuthorizationGuard(
        identity_provider,
        profile_store,
        admin_role=settings.admin_role,
        timeout_seconds=settings.call_timeout_seconds,
    )


def create_call_context_guard(profile_store: ProfileStoreProtocol) -> AuthorizationGuardProtocol:
    """Guard para auth já resolvido no contexto da chamada."""
    settings = get_access_settings()
    return CallContextAuthorizationGuard(
        profile_store,
        admin_role=settings.admin_role,
        timeout_seconds=settings.call_timeout_seconds,
    )


def create_user_lifecycle_orchestrator(
    guard: AuthorizationGuardProtocol,
    identity_provider: IdentityProvider,
    profile_store: ProfileStoreProtocol,
) -> UserLifecycleOrchestrator:
    """Conecta guard e backends ao orquestrador."""
    return UserLifecycleOrchestrator(
        guard,
        identity_provider,
        profile_store,
        timeout_seconds=get_access_settings().call_timeout_seconds,
    )
