"""Contrato de verificação de credenciais bearer."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class InvalidTokenError(Exception):
    """Credencial malformada, expirada, revogada ou rejeitada.

    A mensagem é fixa: detalhes internos do verificador não vazam.
    """

    def __init__(self) -> None:
        super().__init__("Token inválido")


@runtime_checkable
class TokenVerifierProtocol(Protocol):
    """Valida um ID token e extrai o id do chamador."""

    async def verify_token(self, token: str) -> str:
        """Retorna o uid do token ou levanta InvalidTokenError."""
        ...
