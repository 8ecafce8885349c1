"""Agregador de settings do serviço de gestão de usuários.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.access import (
    AccessSettings,
    IdentityBackend,
    ProfileStoreBackend,
    get_access_settings,
)
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)

__all__ = [
    # Access
    "AccessSettings",
    # Base
    "BaseSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    "IdentityBackend",
    "ProfileStoreBackend",
    "get_access_settings",
    "get_base_settings",
    "get_firestore_settings",
]
