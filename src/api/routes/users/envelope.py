"""Leitura do envelope de request `{"data": {...}}`.

Corpo ausente, JSON inválido ou `data` que não é objeto viram payload
vazio; a rejeição fica a cargo da validação, depois da autorização.
"""

from __future__ import annotations

import json
from typing import Any


def parse_request_data(raw_body: bytes) -> dict[str, Any]:
    """Extrai o objeto `data` do corpo JSON."""
    if not raw_body:
        return {}
    try:
        payload = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return {}
    if not isinstance(payload, dict):
        return {}
    data = payload.get("data")
    return data if isinstance(data, dict) else {}
