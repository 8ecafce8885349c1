"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto: guard de autorização, validação de
requests, tradução de erros e chamadas com timeout.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.authorization_guard import (
    BearerTokenAuthorizationGuard,
    CallContextAuthorizationGuard,
)
from app.services.request_validator import UserRequestValidator

__all__ = [
    "BearerTokenAuthorizationGuard",
    "CallContextAuthorizationGuard",
    "UserRequestValidator",
]
