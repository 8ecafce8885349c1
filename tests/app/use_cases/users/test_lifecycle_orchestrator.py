"""Testes do orquestrador de ciclo de vida (guard → validação → dois stores)."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.domain.operation_result import ErrorKind
from app.domain.user import AuthContext, CallContext, UserProfile
from app.protocols.authorization import AuthorizationError
from app.use_cases.users import UserLifecycleOrchestrator
from app.use_cases.users.account_sequencer import MSG_EMAIL_EXISTS
from tests.fakes.user_backends import (
    ADMIN_ID,
    MEMBER_ID,
    build_backends,
    build_bearer_orchestrator,
    build_call_context_orchestrator,
    create_payload,
)
from utils.errors import FirestoreUnavailableError


def _partial_failure_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [record for record in caplog.records if getattr(record, "reconciliation_required", False)]


class TestAuthorizationBeforeWrites:
    @pytest.mark.asyncio
    async def test_missing_credential_is_unauthenticated_without_writes(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)
        profiles_before = backends.profiles.account_ids()

        result = await orchestrator.create_user(None, create_payload())

        assert result.success is False
        assert result.error_code is ErrorKind.UNAUTHENTICATED
        assert backends.profiles.account_ids() == profiles_before
        assert await backends.identity.get_account("inexistente") is None

    @pytest.mark.asyncio
    async def test_invalid_token_is_unauthenticated(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.delete_user("Bearer forjado", {"uid": MEMBER_ID})

        assert result.error_code is ErrorKind.UNAUTHENTICATED
        assert await backends.identity.get_account(MEMBER_ID) is not None

    @pytest.mark.asyncio
    async def test_non_admin_is_permission_denied_without_writes(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)
        profiles_before = backends.profiles.account_ids()

        result = await orchestrator.create_user(
            backends.bearer(backends.member_token),
            create_payload(),
        )

        assert result.error_code is ErrorKind.PERMISSION_DENIED
        assert backends.profiles.account_ids() == profiles_before

    @pytest.mark.asyncio
    async def test_non_admin_cannot_delete(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.delete_user(
            backends.bearer(backends.member_token),
            {"uid": ADMIN_ID},
        )

        assert result.error_code is ErrorKind.PERMISSION_DENIED
        assert await backends.identity.get_account(ADMIN_ID) is not None
        assert ADMIN_ID in backends.profiles.account_ids()

    @pytest.mark.asyncio
    async def test_authorization_runs_before_validation(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.create_user(None, {})

        assert result.error_code is ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_profile_store_outage_during_authorization_is_internal(self) -> None:
        backends = build_backends()
        backends.profiles.fail_on.add("get")
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.create_user(backends.bearer(), create_payload())

        assert result.error_code is ErrorKind.INTERNAL
        assert len(backends.profiles.account_ids()) == 2


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_creates_identity_and_profile_with_same_id(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.create_user(backends.bearer(), create_payload())

        assert result.success is True
        account_id = result.account_id
        assert account_id
        identity = await backends.identity.get_account(account_id)
        assert identity is not None
        assert identity.email == "nova@exemplo.com"
        assert identity.display_name == "Nova Pessoa"
        assert backends.identity.password_of(account_id) == "segredo123"

        profile = await backends.profiles.get(account_id)
        assert profile == UserProfile(
            email="nova@exemplo.com",
            name="Nova Pessoa",
            role="member",
            title="Coordenadora",
            communities=["norte", "sul"],
        )

    @pytest.mark.asyncio
    async def test_communities_default_to_empty(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)
        payload = create_payload()
        del payload["communities"]

        result = await orchestrator.create_user(backends.bearer(), payload)

        profile = await backends.profiles.get(result.account_id or "")
        assert profile is not None
        assert profile.communities == []

    @pytest.mark.asyncio
    async def test_duplicate_email_is_already_exists_and_keeps_existing_pair(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)
        first = await orchestrator.create_user(backends.bearer(), create_payload())
        profiles_before = backends.profiles.account_ids()

        second = await orchestrator.create_user(
            backends.bearer(),
            create_payload(name="Outra Pessoa", password="outra123"),
        )

        assert second.success is False
        assert second.error_code is ErrorKind.ALREADY_EXISTS
        assert second.error_message == MSG_EMAIL_EXISTS
        assert backends.profiles.account_ids() == profiles_before
        profile = await backends.profiles.get(first.account_id or "")
        assert profile is not None
        assert profile.name == "Nova Pessoa"
        assert backends.identity.password_of(first.account_id or "") == "segredo123"

    @pytest.mark.asyncio
    async def test_weak_password_is_invalid_argument(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.create_user(backends.bearer(), create_payload(password="123"))

        assert result.error_code is ErrorKind.INVALID_ARGUMENT
        assert len(backends.profiles.account_ids()) == 2

    @pytest.mark.asyncio
    async def test_malformed_email_is_invalid_argument(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.create_user(backends.bearer(), create_payload(email="sem-arroba"))

        assert result.error_code is ErrorKind.INVALID_ARGUMENT

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["email", "password", "name", "role", "title"])
    async def test_missing_field_is_invalid_argument_without_writes(self, field: str) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)
        payload = create_payload()
        del payload[field]

        result = await orchestrator.create_user(backends.bearer(), payload)

        assert result.error_code is ErrorKind.INVALID_ARGUMENT
        assert field in (result.error_message or "")
        assert len(backends.profiles.account_ids()) == 2

    @pytest.mark.asyncio
    async def test_identity_outage_is_internal(self) -> None:
        backends = build_backends()
        backends.identity.fail_on.add("create")
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.create_user(backends.bearer(), create_payload())

        assert result.error_code is ErrorKind.INTERNAL
        assert len(backends.profiles.account_ids()) == 2

    @pytest.mark.asyncio
    async def test_profile_failure_leaves_orphaned_identity(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.INFO)
        backends = build_backends()
        backends.profiles.fail_on.add("put")
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.create_user(backends.bearer(), create_payload())

        assert result.success is False
        assert result.error_code is ErrorKind.INTERNAL
        assert result.account_id is None
        assert backends.profiles.account_ids() == {ADMIN_ID, MEMBER_ID}

        records = _partial_failure_records(caplog)
        assert len(records) == 1
        orphan_id = records[0].account_id
        assert records[0].hazard == "orphaned_identity"
        assert records[0].failed_step == "profile_put"
        orphan = await backends.identity.get_account(orphan_id)
        assert orphan is not None
        assert orphan.email == "nova@exemplo.com"


class TestUpdateUser:
    def _payload(self, uid: str = MEMBER_ID, **overrides: object) -> dict[str, object]:
        payload: dict[str, object] = {
            "uid": uid,
            "name": "Membro Renomeado",
            "role": "coordinator",
            "title": "Coordenação",
            "communities": ["leste"],
        }
        payload.update(overrides)
        return payload

    @pytest.mark.asyncio
    async def test_updates_profile_and_display_name(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.update_user(backends.bearer(), self._payload())

        assert result.success is True
        assert result.account_id is None
        profile = await backends.profiles.get(MEMBER_ID)
        assert profile is not None
        assert profile.name == "Membro Renomeado"
        assert profile.role == "coordinator"
        assert profile.title == "Coordenação"
        assert profile.communities == ["leste"]
        assert profile.email == "membro@exemplo.com"
        identity = await backends.identity.get_account(MEMBER_ID)
        assert identity is not None
        assert identity.display_name == "Membro Renomeado"
        assert backends.identity.password_of(MEMBER_ID) == "secret123"

    @pytest.mark.asyncio
    async def test_password_is_changed_when_given(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.update_user(
            backends.bearer(),
            self._payload(password="novaSenha1"),
        )

        assert result.success is True
        assert backends.identity.password_of(MEMBER_ID) == "novaSenha1"

    @pytest.mark.asyncio
    async def test_omitted_communities_overwrite_to_empty(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)
        await orchestrator.update_user(backends.bearer(), self._payload(communities=["a", "b"]))
        payload = self._payload()
        del payload["communities"]

        result = await orchestrator.update_user(backends.bearer(), payload)

        assert result.success is True
        profile = await backends.profiles.get(MEMBER_ID)
        assert profile is not None
        assert profile.communities == []

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found_without_writes(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)
        profiles_before = backends.profiles.account_ids()

        result = await orchestrator.update_user(backends.bearer(), self._payload(uid="nao-existe"))

        assert result.error_code is ErrorKind.NOT_FOUND
        assert backends.profiles.account_ids() == profiles_before
        assert await backends.identity.get_account("nao-existe") is None

    @pytest.mark.asyncio
    async def test_weak_password_keeps_profile_write(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.INFO)
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.update_user(backends.bearer(), self._payload(password="123"))

        assert result.error_code is ErrorKind.INVALID_ARGUMENT
        profile = await backends.profiles.get(MEMBER_ID)
        assert profile is not None
        assert profile.name == "Membro Renomeado"
        assert backends.identity.password_of(MEMBER_ID) == "secret123"
        records = _partial_failure_records(caplog)
        assert [record.hazard for record in records] == ["partial_update"]

    @pytest.mark.asyncio
    async def test_identity_outage_after_profile_write_is_internal(self) -> None:
        backends = build_backends()
        backends.identity.fail_on.add("update")
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.update_user(backends.bearer(), self._payload())

        assert result.error_code is ErrorKind.INTERNAL
        profile = await backends.profiles.get(MEMBER_ID)
        assert profile is not None
        assert profile.name == "Membro Renomeado"

    @pytest.mark.asyncio
    async def test_profile_without_identity_is_not_found_after_profile_write(self) -> None:
        backends = build_backends()
        backends.profiles.seed("so-perfil", UserProfile(email="x@y.com", name="X"))
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.update_user(backends.bearer(), self._payload(uid="so-perfil"))

        assert result.error_code is ErrorKind.NOT_FOUND


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_deletes_identity_and_profile(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.delete_user(backends.bearer(), {"uid": MEMBER_ID})

        assert result.success is True
        assert await backends.identity.get_account(MEMBER_ID) is None
        assert await backends.profiles.get(MEMBER_ID) is None

    @pytest.mark.asyncio
    async def test_deleted_user_cannot_be_updated_or_deleted_again(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)
        await orchestrator.delete_user(backends.bearer(), {"uid": MEMBER_ID})

        updated = await orchestrator.update_user(
            backends.bearer(),
            {"uid": MEMBER_ID, "name": "N", "role": "r", "title": "t"},
        )
        deleted = await orchestrator.delete_user(backends.bearer(), {"uid": MEMBER_ID})

        assert updated.error_code is ErrorKind.NOT_FOUND
        assert deleted.error_code is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_deleted_user_can_no_longer_authenticate(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)
        await orchestrator.delete_user(backends.bearer(), {"uid": MEMBER_ID})

        result = await orchestrator.create_user(
            backends.bearer(backends.member_token),
            create_payload(),
        )

        assert result.error_code is ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_identity_failure_aborts_before_profile(self) -> None:
        backends = build_backends()
        backends.identity.fail_on.add("delete")
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.delete_user(backends.bearer(), {"uid": MEMBER_ID})

        assert result.error_code is ErrorKind.INTERNAL
        assert MEMBER_ID in backends.profiles.account_ids()

    @pytest.mark.asyncio
    async def test_profile_failure_leaves_orphaned_profile(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.INFO)
        backends = build_backends()
        backends.profiles.fail_on.add("delete")
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.delete_user(backends.bearer(), {"uid": MEMBER_ID})

        assert result.error_code is ErrorKind.INTERNAL
        assert await backends.identity.get_account(MEMBER_ID) is None
        assert MEMBER_ID in backends.profiles.account_ids()
        records = _partial_failure_records(caplog)
        assert [(r.hazard, r.account_id) for r in records] == [("orphaned_profile", MEMBER_ID)]

    @pytest.mark.asyncio
    async def test_missing_uid_is_invalid_argument(self) -> None:
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        result = await orchestrator.delete_user(backends.bearer(), {})

        assert result.error_code is ErrorKind.INVALID_ARGUMENT


class TestCallContextStrategy:
    @pytest.mark.asyncio
    async def test_admin_context_creates_user(self) -> None:
        backends = build_backends()
        orchestrator = build_call_context_orchestrator(backends)

        result = await orchestrator.create_user(
            CallContext(auth=AuthContext(uid=ADMIN_ID)),
            create_payload(),
        )

        assert result.success is True
        assert result.account_id in backends.profiles.account_ids()

    @pytest.mark.asyncio
    async def test_context_without_auth_is_unauthenticated(self) -> None:
        backends = build_backends()
        orchestrator = build_call_context_orchestrator(backends)

        result = await orchestrator.delete_user(CallContext(), {"uid": MEMBER_ID})

        assert result.error_code is ErrorKind.UNAUTHENTICATED
        assert await backends.identity.get_account(MEMBER_ID) is not None


class TestInjectedCollaborators:
    @pytest.mark.asyncio
    async def test_guard_error_kind_is_forwarded(self) -> None:
        guard = MagicMock()
        guard.authorize = AsyncMock(
            side_effect=AuthorizationError(ErrorKind.PERMISSION_DENIED, "negado"),
        )
        identity = MagicMock()
        profiles = MagicMock()
        orchestrator = UserLifecycleOrchestrator(guard, identity, profiles)

        result = await orchestrator.delete_user("qualquer", {"uid": "u-1"})

        assert result.error_code is ErrorKind.PERMISSION_DENIED
        assert result.error_message == "negado"
        identity.delete_account.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_guard_exception_is_internal(self) -> None:
        guard = MagicMock()
        guard.authorize = AsyncMock(side_effect=KeyError("boom"))
        orchestrator = UserLifecycleOrchestrator(guard, MagicMock(), MagicMock())

        result = await orchestrator.create_user("qualquer", create_payload())

        assert result.success is False
        assert result.error_code is ErrorKind.INTERNAL

    @pytest.mark.asyncio
    async def test_guard_infrastructure_error_is_internal(self) -> None:
        guard = MagicMock()
        guard.authorize = AsyncMock(side_effect=FirestoreUnavailableError("down"))
        orchestrator = UserLifecycleOrchestrator(guard, MagicMock(), MagicMock())

        result = await orchestrator.update_user("qualquer", {"uid": "u"})

        assert result.error_code is ErrorKind.INTERNAL

    @pytest.mark.asyncio
    async def test_operation_metric_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)
        backends = build_backends()
        orchestrator = build_bearer_orchestrator(backends)

        await orchestrator.delete_user(backends.bearer(), {"uid": MEMBER_ID})

        metrics = [r for r in caplog.records if r.getMessage() == "metric_user_operation"]
        assert len(metrics) == 1
        assert metrics[0].operation == "delete_user"
        assert metrics[0].outcome == "success"
