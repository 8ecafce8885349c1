"""Stores — implementações concretas de persistência de perfis.

Módulos disponíveis:
    - firestore_profile_store: Store de perfis usando Firestore
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_profile_store import FirestoreProfileStore
from app.infra.stores.memory_stores import MemoryProfileStore

__all__ = [
    # Firestore
    "FirestoreProfileStore",
    # Memory (dev/test)
    "MemoryProfileStore",
]
