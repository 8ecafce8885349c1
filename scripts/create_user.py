#!/usr/bin/env python3
"""Cria usuário direto no Firebase Auth + Firestore com credenciais de operador.

Uso:
    GOOGLE_APPLICATION_CREDENTIALS=service-account.json \\
    python scripts/create_user.py --email ana@exemplo.com --password segredo1 \\
        --name "Ana" --role admin --title Coordenadora --communities "norte, sul"

Não passa pelo guard de administrador: quem roda o script já tem
credenciais privilegiadas no projeto.

Códigos de saída: 0 sucesso, 1 parâmetros ausentes, 2 falha na criação.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_firebase_app, create_firestore_client
from app.domain.operation_result import ErrorKind
from app.domain.user_requests import CreateUserRequest
from app.infra.identity import FirebaseIdentityProvider
from app.infra.stores import FirestoreProfileStore
from app.use_cases.users import UserAccountSequencer
from app.use_cases.users.account_sequencer import MSG_EMAIL_EXISTS
from config.settings import get_access_settings, get_firestore_settings

if TYPE_CHECKING:
    from collections.abc import Sequence

EXIT_OK = 0
EXIT_MISSING_ARGS = 1
EXIT_FAILED = 2

REQUIRED_FLAGS = ("email", "password", "name", "role", "title")


def parse_communities(raw: str | None) -> list[str]:
    """'a, b,,c' -> ['a', 'b', 'c']."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    for flag in REQUIRED_FLAGS:
        # Obrigatoriedade checada em main() para manter o código de saída 1
        parser.add_argument(f"--{flag}", default=None)
    parser.add_argument(
        "--communities",
        default=None,
        help="Lista separada por vírgula. Se omitido, fica vazia.",
    )
    return parser.parse_args(argv)


def build_sequencer() -> UserAccountSequencer:
    """Conecta Firebase Auth e Firestore reais."""
    return UserAccountSequencer(
        FirebaseIdentityProvider(create_firebase_app()),
        FirestoreProfileStore(
            create_firestore_client(),
            collection_name=get_firestore_settings().collection_users,
        ),
        timeout_seconds=get_access_settings().call_timeout_seconds,
    )


def main(
    argv: Sequence[str] | None = None,
    sequencer: UserAccountSequencer | None = None,
) -> int:
    args = parse_args(argv)
    missing = [flag for flag in REQUIRED_FLAGS if not getattr(args, flag)]
    if missing:
        flags = " ".join(f"--{flag}" for flag in REQUIRED_FLAGS)
        print(f"Parâmetros obrigatórios ausentes: {flags}", file=sys.stderr)
        return EXIT_MISSING_ARGS

    request = CreateUserRequest(
        email=args.email,
        password=args.password,
        name=args.name,
        role=args.role,
        title=args.title,
        communities=parse_communities(args.communities),
    )
    result = asyncio.run((sequencer or build_sequencer()).create(request))

    if result.success:
        print(f"Usuário criado: {result.account_id}")
        return EXIT_OK
    if result.error_code is ErrorKind.ALREADY_EXISTS:
        print(MSG_EMAIL_EXISTS, file=sys.stderr)
    else:
        print(f"Erro ao criar usuário: {result.error_message}", file=sys.stderr)
    return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
