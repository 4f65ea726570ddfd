"""Tests for granting, changing and revoking roles."""

import logging

import pytest

from app.core.exceptions import (
    SelfDowngradeError, SelfRevocationError, TargetNotFoundError
)
from app.domains.documents.services import DocumentService
from app.domains.permissions.entities import Role
from app.domains.permissions.services import AccessControlService, PermissionService


@pytest.fixture
async def owner_id(make_user):
    return await make_user("owner")


@pytest.fixture
async def document(session, owner_id):
    return await DocumentService(session).create_document(owner_id, "Roadmap", "")


@pytest.mark.asyncio
async def test_grant_is_idempotent(session, document, make_user):
    user_id = await make_user()
    permissions = PermissionService(session)

    await permissions.grant(document.id, user_id, Role.EDITOR)
    await permissions.grant(document.id, user_id, Role.EDITOR)

    rows = await permissions.list_users_with_role(document.id)
    assert [row for row in rows if row[0] == user_id] == [(user_id, Role.EDITOR)]


@pytest.mark.asyncio
async def test_grant_replaces_existing_role(session, document, make_user):
    user_id = await make_user()
    permissions = PermissionService(session)

    await permissions.grant(document.id, user_id, Role.VIEWER)
    permission = await permissions.grant(document.id, user_id, Role.OWNER)

    assert permission.role is Role.OWNER
    assert await AccessControlService(session).get_role(user_id, document.id) is Role.OWNER
    assert len(await permissions.list_users_with_role(document.id)) == 2


@pytest.mark.asyncio
async def test_grant_accepts_role_names(session, document, make_user):
    user_id = await make_user()

    permission = await PermissionService(session).grant(document.id, user_id, "viewer")

    assert permission.role is Role.VIEWER
    assert permission.document_id == document.id


@pytest.mark.asyncio
async def test_update_role_changes_existing_row(session, document, make_user):
    user_id = await make_user()
    permissions = PermissionService(session)
    await permissions.grant(document.id, user_id, Role.VIEWER)

    await permissions.update_role(document.id, document.user_id, user_id, Role.EDITOR)

    assert await AccessControlService(session).get_role(user_id, document.id) is Role.EDITOR


@pytest.mark.asyncio
@pytest.mark.parametrize("new_role", [Role.EDITOR, Role.VIEWER])
async def test_owner_cannot_downgrade_self(session, document, owner_id, new_role):
    with pytest.raises(SelfDowngradeError):
        await PermissionService(session).update_role(document.id, owner_id, owner_id, new_role)

    assert await AccessControlService(session).get_role(owner_id, document.id) is Role.OWNER


@pytest.mark.asyncio
async def test_owner_may_reassert_own_owner_role(session, document, owner_id):
    await PermissionService(session).update_role(document.id, owner_id, owner_id, Role.OWNER)

    assert await AccessControlService(session).get_role(owner_id, document.id) is Role.OWNER


@pytest.mark.asyncio
async def test_owner_cannot_revoke_self(session, document, owner_id):
    with pytest.raises(SelfRevocationError):
        await PermissionService(session).revoke(document.id, owner_id, owner_id)

    assert await AccessControlService(session).get_role(owner_id, document.id) is Role.OWNER


@pytest.mark.asyncio
async def test_update_role_without_row_is_target_not_found(session, document, owner_id, make_user):
    stranger = await make_user()

    with pytest.raises(TargetNotFoundError) as exc_info:
        await PermissionService(session).update_role(document.id, owner_id, stranger, Role.EDITOR)

    assert exc_info.value.user_id == stranger
    assert await AccessControlService(session).get_role(stranger, document.id) is None


@pytest.mark.asyncio
async def test_revoke_without_row_is_target_not_found(session, document, owner_id, make_user):
    stranger = await make_user()

    with pytest.raises(TargetNotFoundError):
        await PermissionService(session).revoke(document.id, owner_id, stranger)


@pytest.mark.asyncio
async def test_revoke_removes_row(session, document, owner_id, make_user):
    user_id = await make_user()
    permissions = PermissionService(session)
    await permissions.grant(document.id, user_id, Role.EDITOR)

    await permissions.revoke(document.id, owner_id, user_id)

    assert await AccessControlService(session).get_role(user_id, document.id) is None
    assert await permissions.list_users_with_role(document.id) == [(owner_id, Role.OWNER)]


@pytest.mark.asyncio
async def test_listing_for_unknown_document_is_empty(session):
    permissions = PermissionService(session)

    assert await permissions.list_users_with_role(424242) == []
    assert await permissions.list_collaborators(424242) == []


@pytest.mark.asyncio
async def test_list_collaborators_includes_user_details(session, document, owner_id, make_user):
    user_id = await make_user("alice")
    await PermissionService(session).grant(document.id, user_id, Role.VIEWER)

    collaborators = await PermissionService(session).list_collaborators(document.id)

    assert [(c.user_id, c.role, c.name) for c in collaborators] == [
        (owner_id, Role.OWNER, "owner"),
        (user_id, Role.VIEWER, "alice"),
    ]


@pytest.mark.asyncio
async def test_grant_is_logged_only_once_committed(session, document, make_user, caplog):
    user_id = await make_user()
    permissions = PermissionService(session)

    with caplog.at_level(logging.INFO, logger="app.domains.permissions.services"):
        await permissions.grant(document.id, user_id, Role.EDITOR, commit=False)
        await session.rollback()

    assert "Granted" not in caplog.text
    assert await AccessControlService(session).get_role(user_id, document.id) is None

    with caplog.at_level(logging.INFO, logger="app.domains.permissions.services"):
        await permissions.grant(document.id, user_id, Role.EDITOR)

    assert f"Granted editor on document {document.id} to user {user_id}" in caplog.text
