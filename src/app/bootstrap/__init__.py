"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, inicializa
dependências e conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_http_orchestrator

    # Na inicialização do serviço
    initialize_app()

    orchestrator = get_http_orchestrator()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_access_settings, get_base_settings, get_firestore_settings

if TYPE_CHECKING:
    from app.protocols.profile_store import ProfileStoreProtocol
    from app.use_cases.users import UserLifecycleOrchestrator

SERVICE_NAME = "gestao_usuarios"

DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON estruturado com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    configure_logging(
        level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development`/`test` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())

    access = get_access_settings()
    errors.extend(f"access: {error}" for error in access.validate_for_environment(environment))

    if access.profile_store_backend == "firestore":
        firestore_errors = get_firestore_settings().validate(base.gcp_project)
        errors.extend(f"firestore: {error}" for error in firestore_errors)

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_identity_provider():
    """Obtém provedor de identidade (singleton)."""
    from app.bootstrap.dependencies import create_identity_provider
    return create_identity_provider()


@lru_cache(maxsize=1)
def get_profile_store() -> ProfileStoreProtocol:
    """Obtém profile store (singleton)."""
    from app.bootstrap.dependencies import create_profile_store
    return create_profile_store()


@lru_cache(maxsize=1)
def get_http_orchestrator() -> UserLifecycleOrchestrator:
    """Orquestrador com guard de header Bearer (endpoints HTTP)."""
    from app.bootstrap.dependencies import (
        create_bearer_guard,
        create_user_lifecycle_orchestrator,
    )

    identity_provider = get_identity_provider()
    profile_store = get_profile_store()
    return create_user_lifecycle_orchestrator(
        create_bearer_guard(identity_provider, profile_store),
        identity_provider,
        profile_store,
    )


@lru_cache(maxsize=1)
def get_callable_orchestrator() -> UserLifecycleOrchestrator:
    """Orquestrador com guard de contexto (endpoints chamáveis)."""
    from app.bootstrap.dependencies import (
        create_call_context_guard,
        create_user_lifecycle_orchestrator,
    )

    profile_store = get_profile_store()
    return create_user_lifecycle_orchestrator(
        create_call_context_guard(profile_store),
        get_identity_provider(),
        profile_store,
    )
