"""Formatter JSON com campos padronizados."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem fixa para saída estável
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON.

    Exemplo de output:
        {"asctime": "...", "level": "ERROR", "logger": "app.use_cases.users",
         "message": "orphaned_identity", "correlation_id": "abc-123",
         "service": "gestao_usuarios", "account_id": "u1"}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
