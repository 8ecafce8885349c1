"""Configuração centralizada de logging.

Configura logging JSON estruturado com campos obrigatórios
(correlation_id, service, level, logger, message) e nível por ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "gestao_usuarios"

PartialFailureHazard = Literal["orphaned_identity", "orphaned_profile", "partial_update"]


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id do
            contexto atual (ContextVar de app.observability).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo (o filter injeta service e correlation_id)."""
    return logging.getLogger(name)


def log_partial_failure(
    logger: logging.Logger,
    operation: str,
    hazard: PartialFailureHazard,
    account_id: str,
    step: str,
    error_type: str | None = None,
) -> None:
    """Registra estado inconsistente entre identidade e perfil.

    Nenhuma compensação é feita pelo serviço; este log é a entrada da
    reconciliação externa, por isso sempre em nível ERROR e sempre com
    account_id.

    Args:
        logger: Logger do módulo chamador.
        operation: Operação (create_user, update_user, delete_user).
        hazard: Tipo de inconsistência deixada para trás.
        account_id: Conta afetada (id compartilhado pelos dois stores).
        step: Etapa que falhou (ex: "profile_put").
        error_type: Nome da exceção, quando houver.
    """
    extra: dict[str, object] = {
        "component": "user_lifecycle",
        "operation": operation,
        "hazard": hazard,
        "account_id": account_id,
        "failed_step": step,
        "reconciliation_required": True,
    }
    if error_type:
        extra["error_type"] = error_type

    logger.error(hazard, extra=extra)
