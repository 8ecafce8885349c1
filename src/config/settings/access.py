"""Settings de controle de acesso e backends de identidade/perfil.

O papel de administrador é um valor sentinela gravado no campo `role`
do perfil; apenas esse valor libera as operações de gestão de usuários.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

IdentityBackend = Literal["firebase", "memory"]
ProfileStoreBackend = Literal["firestore", "memory"]

_VALID_IDENTITY_BACKENDS = ("firebase", "memory")
_VALID_PROFILE_BACKENDS = ("firestore", "memory")


@dataclass(frozen=True)
class AccessSettings:
    """Configurações de autorização e backends.

    Attributes:
        admin_role: Valor sentinela de `role` que concede acesso de administrador
        call_timeout_seconds: Timeout de cada chamada a identidade/Firestore
        identity_backend: Backend do provedor de identidade (firebase|memory)
        profile_store_backend: Backend do profile store (firestore|memory)
        check_revoked_tokens: Verifica revogação ao validar ID tokens
        cors_allow_origins: Origins liberadas no CORS ("*" reflete a origem)
    """

    admin_role: str = "admin"
    call_timeout_seconds: float = 10.0
    identity_backend: IdentityBackend = "firebase"
    profile_store_backend: ProfileStoreBackend = "firestore"
    check_revoked_tokens: bool = True
    cors_allow_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))

    def validate(self) -> list[str]:
        """Valida configurações de acesso.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if not self.admin_role:
            errors.append("ADMIN_ROLE não pode ser vazio")

        if self.call_timeout_seconds <= 0:
            errors.append(
                f"BACKEND_CALL_TIMEOUT_SECONDS deve ser positivo: {self.call_timeout_seconds}"
            )

        if self.identity_backend not in _VALID_IDENTITY_BACKENDS:
            errors.append(f"IDENTITY_BACKEND inválido: {self.identity_backend}")

        if self.profile_store_backend not in _VALID_PROFILE_BACKENDS:
            errors.append(f"PROFILE_STORE_BACKEND inválido: {self.profile_store_backend}")

        return errors

    def validate_for_environment(self, environment: str) -> list[str]:
        """Valida regras que dependem do ambiente (memória só em dev)."""
        errors = self.validate()
        if environment in ("staging", "production"):
            if self.identity_backend == "memory":
                errors.append("IDENTITY_BACKEND=memory não é permitido fora de development")
            if self.profile_store_backend == "memory":
                errors.append("PROFILE_STORE_BACKEND=memory não é permitido fora de development")
        return errors


def _parse_timeout(raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        return -1.0


def _parse_origins(raw: str) -> tuple[str, ...]:
    origins = tuple(item.strip() for item in raw.split(",") if item.strip())
    return origins or ("*",)


def _load_access_from_env() -> AccessSettings:
    """Carrega AccessSettings de variáveis de ambiente."""
    return AccessSettings(
        admin_role=os.getenv("ADMIN_ROLE", "admin"),
        call_timeout_seconds=_parse_timeout(os.getenv("BACKEND_CALL_TIMEOUT_SECONDS", "10")),
        identity_backend=os.getenv("IDENTITY_BACKEND", "firebase").lower(),  # type: ignore[arg-type]
        profile_store_backend=os.getenv(  # type: ignore[arg-type]
            "PROFILE_STORE_BACKEND", "firestore"
        ).lower(),
        check_revoked_tokens=os.getenv("CHECK_REVOKED_TOKENS", "true").lower() in ("true", "1"),
        cors_allow_origins=_parse_origins(os.getenv("CORS_ALLOW_ORIGINS", "*")),
    )


@lru_cache(maxsize=1)
def get_access_settings() -> AccessSettings:
    """Retorna instância cacheada de AccessSettings."""
    return _load_access_from_env()
