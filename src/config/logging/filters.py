"""Filters de logging para injeção de contexto e remoção de segredos.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Atributos que nunca podem sair em log, mesmo se passados via `extra`
SENSITIVE_FIELDS = frozenset(
    {"password", "token", "id_token", "authorization", "email", "display_name"}
)

REDACTED = "[redacted]"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id/service e mascara campos sensíveis do record.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta (sempre retorna True)."""
        # Preservar correlation_id passado explicitamente via `extra`
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name

        for field in SENSITIVE_FIELDS.intersection(record.__dict__):
            setattr(record, field, REDACTED)
        return True
