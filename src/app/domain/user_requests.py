"""Requests validados das operações de gestão de usuários.

Campos obrigatórios são strings não vazias. `communities` ausente vira
lista vazia: em UpdateUser isso sobrescreve o valor salvo.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

RequiredStr = Annotated[str, StringConstraints(min_length=1)]


def _none_to_empty(value: object) -> object:
    return [] if value is None else value


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class CreateUserRequest(_RequestModel):
    email: RequiredStr
    password: RequiredStr
    name: RequiredStr
    role: RequiredStr
    title: RequiredStr
    communities: list[str] = Field(default_factory=list)

    @field_validator("communities", mode="before")
    @classmethod
    def _default_communities(cls, value: object) -> object:
        return _none_to_empty(value)


class UpdateUserRequest(_RequestModel):
    uid: RequiredStr
    name: RequiredStr
    role: RequiredStr
    title: RequiredStr
    communities: list[str] = Field(default_factory=list)
    password: str | None = None

    @field_validator("communities", mode="before")
    @classmethod
    def _default_communities(cls, value: object) -> object:
        return _none_to_empty(value)

    @field_validator("password", mode="before")
    @classmethod
    def _blank_password_is_absent(cls, value: object) -> object:
        # Senha vazia equivale a "não alterar senha"
        return None if value == "" else value


class DeleteUserRequest(_RequestModel):
    uid: RequiredStr
