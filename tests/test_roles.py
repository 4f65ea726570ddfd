"""Tests for the role lattice."""

import pytest

from app.domains.permissions.entities import Capability, DocumentPermission, Role


@pytest.mark.parametrize(
    "role,view,edit,own",
    [
        (Role.VIEWER, True, False, False),
        (Role.EDITOR, True, True, False),
        (Role.OWNER, True, True, True),
    ],
)
def test_role_grants_its_tier_and_below(role, view, edit, own):
    assert role.grants(Capability.VIEW) is view
    assert role.grants(Capability.EDIT) is edit
    assert role.grants(Capability.OWN) is own


def test_owner_is_superset_of_editor_is_superset_of_viewer():
    def capabilities(role):
        return {c for c in Capability if role.grants(c)}

    assert capabilities(Role.VIEWER) < capabilities(Role.EDITOR) < capabilities(Role.OWNER)


def test_capability_required_roles():
    assert Capability.VIEW.required_role is Role.VIEWER
    assert Capability.EDIT.required_role is Role.EDITOR
    assert Capability.OWN.required_role is Role.OWNER


def test_at_least_uses_rank_not_alphabet():
    assert Role.OWNER.at_least(Role.VIEWER)
    assert Role.EDITOR.at_least(Role.EDITOR)
    assert not Role.VIEWER.at_least(Role.EDITOR)


def test_roles_parse_from_strings():
    assert Role("editor") is Role.EDITOR
    assert Capability("own") is Capability.OWN


def test_invalid_role_string_is_rejected():
    with pytest.raises(ValueError):
        Role("admin")


def test_document_permission_coerces_role():
    permission = DocumentPermission(document_id=1, user_id=2, role="viewer")

    assert permission.role is Role.VIEWER
    assert permission.allows(Capability.VIEW)
    assert not permission.allows(Capability.EDIT)
