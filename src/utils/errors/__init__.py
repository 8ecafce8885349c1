"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    BackendTimeoutError,
    FirestoreUnavailableError,
    InfrastructureError,
)

__all__ = [
    "BackendTimeoutError",
    "FirestoreUnavailableError",
    "InfrastructureError",
]
