"""Testes dos guards de administrador (header Bearer e contexto da chamada)."""

from __future__ import annotations

import asyncio

import pytest

from app.domain.operation_result import ErrorKind
from app.domain.user import AuthContext, CallContext
from app.protocols.authorization import AuthorizationError
from app.services.authorization_guard import (
    MSG_TOKEN_REJECTED,
    BearerTokenAuthorizationGuard,
    CallContextAuthorizationGuard,
    extract_bearer_token,
)
from tests.fakes.user_backends import ADMIN_ID, ADMIN_ROLE, MEMBER_ID, build_backends
from utils.errors import BackendTimeoutError, FirestoreUnavailableError


def _bearer_guard(backends, timeout_seconds: float = 1.0) -> BearerTokenAuthorizationGuard:
    return BearerTokenAuthorizationGuard(
        backends.identity,
        backends.profiles,
        admin_role=ADMIN_ROLE,
        timeout_seconds=timeout_seconds,
    )


def _context_guard(backends) -> CallContextAuthorizationGuard:
    return CallContextAuthorizationGuard(
        backends.profiles,
        admin_role=ADMIN_ROLE,
        timeout_seconds=1.0,
    )


class TestExtractBearerToken:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc", "abc"),
            ("bearer abc", "abc"),
            ("Bearer   abc  ", "abc"),
            ("Bearer ", None),
            ("Basic abc", None),
            ("abc", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract(self, header: str | None, expected: str | None) -> None:
        assert extract_bearer_token(header) == expected


class TestBearerTokenAuthorizationGuard:
    @pytest.mark.asyncio
    async def test_admin_token_returns_caller(self) -> None:
        backends = build_backends()
        caller = await _bearer_guard(backends).authorize(backends.bearer())

        assert caller.id == ADMIN_ID
        assert caller.is_authenticated is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("credential", [None, "", "Bearer", "Token xyz"])
    async def test_missing_bearer_is_unauthenticated(self, credential: str | None) -> None:
        backends = build_backends()

        with pytest.raises(AuthorizationError) as exc_info:
            await _bearer_guard(backends).authorize(credential)

        assert exc_info.value.kind is ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_rejected_token_is_unauthenticated_without_details(self) -> None:
        backends = build_backends()

        with pytest.raises(AuthorizationError) as exc_info:
            await _bearer_guard(backends).authorize("Bearer forjado")

        assert exc_info.value.kind is ErrorKind.UNAUTHENTICATED
        assert exc_info.value.message == MSG_TOKEN_REJECTED

    @pytest.mark.asyncio
    async def test_revoked_token_is_unauthenticated(self) -> None:
        backends = build_backends()
        backends.identity.revoke_token(backends.admin_token)

        with pytest.raises(AuthorizationError) as exc_info:
            await _bearer_guard(backends).authorize(backends.bearer())

        assert exc_info.value.kind is ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_non_admin_role_is_permission_denied(self) -> None:
        backends = build_backends()

        with pytest.raises(AuthorizationError) as exc_info:
            await _bearer_guard(backends).authorize(backends.bearer(backends.member_token))

        assert exc_info.value.kind is ErrorKind.PERMISSION_DENIED

    @pytest.mark.asyncio
    async def test_missing_profile_is_permission_denied(self) -> None:
        backends = build_backends()
        await backends.profiles.delete(ADMIN_ID)

        with pytest.raises(AuthorizationError) as exc_info:
            await _bearer_guard(backends).authorize(backends.bearer())

        assert exc_info.value.kind is ErrorKind.PERMISSION_DENIED

    @pytest.mark.asyncio
    async def test_role_comparison_is_exact(self) -> None:
        backends = build_backends(admin_role="Admin")

        with pytest.raises(AuthorizationError) as exc_info:
            await _bearer_guard(backends).authorize(backends.bearer())

        assert exc_info.value.kind is ErrorKind.PERMISSION_DENIED

    @pytest.mark.asyncio
    async def test_profile_store_failure_propagates(self) -> None:
        backends = build_backends()
        backends.profiles.fail_on.add("get")

        with pytest.raises(FirestoreUnavailableError):
            await _bearer_guard(backends).authorize(backends.bearer())

    @pytest.mark.asyncio
    async def test_slow_verifier_times_out(self) -> None:
        backends = build_backends()

        async def _slow_verify(token: str) -> str:
            await asyncio.sleep(1)
            return ADMIN_ID

        backends.identity.verify_token = _slow_verify  # type: ignore[method-assign]

        with pytest.raises(BackendTimeoutError) as exc_info:
            await _bearer_guard(backends, timeout_seconds=0.01).authorize(backends.bearer())

        assert exc_info.value.operation == "verify_token"

    @pytest.mark.asyncio
    async def test_guard_does_not_write(self) -> None:
        backends = build_backends()
        before = backends.profiles.account_ids()

        await _bearer_guard(backends).authorize(backends.bearer())

        assert backends.profiles.account_ids() == before


class TestCallContextAuthorizationGuard:
    @pytest.mark.asyncio
    async def test_admin_context_returns_caller(self) -> None:
        backends = build_backends()
        context = CallContext(auth=AuthContext(uid=ADMIN_ID))

        caller = await _context_guard(backends).authorize(context)

        assert caller.id == ADMIN_ID

    @pytest.mark.asyncio
    @pytest.mark.parametrize("context", [None, CallContext(), CallContext(auth=AuthContext(uid=""))])
    async def test_without_auth_is_unauthenticated(self, context: CallContext | None) -> None:
        backends = build_backends()

        with pytest.raises(AuthorizationError) as exc_info:
            await _context_guard(backends).authorize(context)

        assert exc_info.value.kind is ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_member_context_is_permission_denied(self) -> None:
        backends = build_backends()
        context = CallContext(auth=AuthContext(uid=MEMBER_ID))

        with pytest.raises(AuthorizationError) as exc_info:
            await _context_guard(backends).authorize(context)

        assert exc_info.value.kind is ErrorKind.PERMISSION_DENIED
