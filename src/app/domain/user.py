"""Modelos de usuário: perfil (Firestore) e identidade (Firebase Auth).

Os dois registros compartilham o mesmo id de conta (uid). Esse id é a
única ligação entre os dois stores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field


@dataclass(frozen=True, slots=True)
class Caller:
    """Chamador derivado de uma credencial verificada (um por request)."""

    id: str
    is_authenticated: bool = True


@dataclass(frozen=True, slots=True)
class AuthContext:
    """Auth já resolvido pelo runtime de funções chamáveis."""

    uid: str
    claims: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class CallContext:
    """Contexto de uma invocação chamável; `auth` é None sem login."""

    auth: AuthContext | None = None


class UserProfile(BaseModel):
    """Atributos de negócio do usuário, persistidos no profile store."""

    email: str = ""
    name: str = ""
    role: str = ""
    title: str = ""
    communities: list[str] = Field(default_factory=list)

    def is_admin(self, admin_role: str) -> bool:
        return self.role == admin_role

    def to_firestore_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_firestore_dict(cls, data: dict[str, Any]) -> UserProfile:
        """Constrói perfil tolerando documentos legados/incompletos."""
        communities = data.get("communities") or []
        if not isinstance(communities, list):
            communities = []
        return cls(
            email=str(data.get("email") or ""),
            name=str(data.get("name") or ""),
            role=str(data.get("role") or ""),
            title=str(data.get("title") or ""),
            communities=[str(item) for item in communities],
        )


class ProfileUpdate(BaseModel):
    """Campos sobrescritos por UpdateUser (email nunca muda por aqui)."""

    name: str
    role: str
    title: str
    communities: list[str] = Field(default_factory=list)

    def to_firestore_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


@dataclass(frozen=True, slots=True)
class IdentityRecord:
    """Conta no provedor de identidade. A senha é write-only e não aparece aqui."""

    account_id: str
    email: str
    display_name: str = ""
    disabled: bool = False
