"""Observabilidade — correlation_id e métricas via logs estruturados.

Uso:
    from app.observability import correlation_scope, get_correlation_id
    from app.observability import record_operation
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    correlation_scope,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import record_operation

__all__ = [
    "CORRELATION_HEADER",
    "correlation_scope",
    "get_correlation_id",
    "record_operation",
    "reset_correlation_id",
    "set_correlation_id",
]
