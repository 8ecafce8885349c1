"""Provedores de identidade — Firebase Auth e memória (dev/test)."""

from __future__ import annotations

from app.infra.identity.firebase_identity_provider import FirebaseIdentityProvider
from app.infra.identity.memory_identity_provider import MemoryIdentityProvider

__all__ = [
    "FirebaseIdentityProvider",
    "MemoryIdentityProvider",
]
