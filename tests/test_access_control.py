"""Tests for the access decision engine."""

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import PermissionDeniedError, StorePermissionQueryError
from app.domains.documents.services import DocumentService
from app.domains.permissions.entities import Capability, Role
from app.domains.permissions.services import AccessControlService, PermissionService


@pytest.fixture
async def document(session, make_user):
    owner_id = await make_user("owner")
    document = await DocumentService(session).create_document(owner_id, "Handbook", "")
    return document


class TestCanAccess:
    """Decision rule over the role lattice."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "role,expected",
        [
            (Role.VIEWER, {Capability.VIEW}),
            (Role.EDITOR, {Capability.VIEW, Capability.EDIT}),
            (Role.OWNER, {Capability.VIEW, Capability.EDIT, Capability.OWN}),
        ],
    )
    async def test_lattice_monotonicity(self, session, document, make_user, role, expected):
        user_id = await make_user()
        await PermissionService(session).grant(document.id, user_id, role)
        access = AccessControlService(session)

        allowed = {c for c in Capability if await access.can_access(user_id, document.id, c)}

        assert allowed == expected

    @pytest.mark.asyncio
    async def test_no_role_denies_everything(self, session, document, make_user):
        stranger = await make_user()
        access = AccessControlService(session)

        for capability in Capability:
            assert await access.can_access(stranger, document.id, capability) is False

    @pytest.mark.asyncio
    async def test_missing_document_is_a_plain_deny(self, session, make_user):
        user_id = await make_user()

        assert await AccessControlService(session).can_access(user_id, 9999, "view") is False

    @pytest.mark.asyncio
    async def test_every_check_reads_fresh_state(self, session, document, make_user):
        user_id = await make_user()
        access = AccessControlService(session)
        permissions = PermissionService(session)

        await permissions.grant(document.id, user_id, Role.VIEWER)
        assert not await access.can_access(user_id, document.id, Capability.EDIT)

        await permissions.grant(document.id, user_id, Role.EDITOR)
        assert await access.can_access(user_id, document.id, Capability.EDIT)


class TestRequire:

    @pytest.mark.asyncio
    async def test_require_raises_permission_denied(self, session, document, make_user):
        viewer = await make_user()
        await PermissionService(session).grant(document.id, viewer, Role.VIEWER)

        with pytest.raises(PermissionDeniedError) as exc_info:
            await AccessControlService(session).require(viewer, document.id, Capability.EDIT)

        assert exc_info.value.capability == "edit"
        assert exc_info.value.document_id == document.id

    @pytest.mark.asyncio
    async def test_require_passes_for_sufficient_role(self, session, document):
        await AccessControlService(session).require(document.user_id, document.id, Capability.OWN)


@pytest.mark.asyncio
async def test_store_failure_is_distinct_from_deny(session, document, monkeypatch):
    access = AccessControlService(session)

    async def broken_find_role(document_id, user_id):
        raise OperationalError("SELECT role", {}, Exception("connection lost"))

    monkeypatch.setattr(access.permission_repository, "find_role", broken_find_role)

    with pytest.raises(StorePermissionQueryError):
        await access.can_access(document.user_id, document.id, Capability.VIEW)
