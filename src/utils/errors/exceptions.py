"""Exceções de infraestrutura compartilhadas entre adapters e use cases."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura (backend indisponível, timeout)."""


class FirestoreUnavailableError(InfrastructureError):
    """Falha de indisponibilidade ao acessar Firestore."""


class BackendTimeoutError(InfrastructureError):
    """Chamada a backend externo excedeu o timeout configurado.

    Timeout é tratado como falha, nunca como resultado ambíguo.
    """

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        super().__init__(f"{operation} excedeu {timeout_seconds:.1f}s")
        self.operation = operation
        self.timeout_seconds = timeout_seconds
