"""Registro de métricas via structured logging.

As métricas são logs estruturados agregados depois (BigQuery, Cloud
Logging). Não há client de métricas no processo.

Uso:
    start = time.perf_counter()
    result = ...
    record_operation("create_user", result, (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.operation_result import UserOperationResult

logger = logging.getLogger(__name__)


def record_operation(
    operation: str,
    result: UserOperationResult,
    latency_ms: float,
) -> None:
    """Registra outcome e latência de uma operação de ciclo de vida.

    Args:
        operation: create_user | update_user | delete_user
        result: Resultado devolvido pelo orquestrador
        latency_ms: Latência total em milissegundos
    """
    logger.info(
        "metric_user_operation",
        extra={
            "metric_type": "user_operation",
            "operation": operation,
            "outcome": "success" if result.success else "failure",
            "error_code": result.error_code.value if result.error_code else None,
            "latency_ms": round(latency_ms, 2),
        },
    )
