"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="gestao_usuarios")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("user_created", extra={"account_id": "abc123"})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime

Logs nunca carregam e-mail, senha, nome ou token: apenas ids de conta,
operação e tipo de erro.
"""

from config.logging.config import (
    configure_logging,
    get_logger,
    log_partial_failure,
)
from config.logging.filters import SENSITIVE_FIELDS, CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "SENSITIVE_FIELDS",
    # Filters
    "CorrelationIdFilter",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
    "log_partial_failure",
]
