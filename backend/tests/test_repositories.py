"""
Tests for repository helpers used by the reset.
"""

from __future__ import annotations

import pytest

from app.models import INSTANCE_OWNER_SET_UP_KEY, User
from app.repositories import ProjectRepository, SettingsRepository, UserRepository
from app.repositories.project_repository import personal_project_name
from app.repositories.user_repository import apply_owner_defaults, has_owner_shape

from db_factories import create_member, create_owner


def test_settings_upsert_inserts_then_overwrites(session):
    repo = SettingsRepository(session)

    created = repo.upsert(INSTANCE_OWNER_SET_UP_KEY, "true", load_on_startup=True)
    session.commit()
    assert created.value == "true"

    updated = repo.upsert(INSTANCE_OWNER_SET_UP_KEY, "false")
    session.commit()
    assert updated.value == "false"
    # load_on_startup is only set on insert
    assert updated.load_on_startup is True


def test_settings_upsert_same_value_is_harmless(session):
    repo = SettingsRepository(session)
    repo.upsert("userManagement.isInstanceOwnerSetUp", "false")
    repo.upsert("userManagement.isInstanceOwnerSetUp", "false")
    session.commit()
    assert repo.get("userManagement.isInstanceOwnerSetUp").value == "false"


def test_personal_project_lookup(session):
    owner = create_owner(session)
    repo = ProjectRepository(session)

    project = repo.get_personal_project_for_user_or_fail(owner.id)

    assert project.is_personal
    assert repo.find_personal_project_ids_for_users([owner.id]) == [project.id]


def test_personal_project_lookup_or_fail_raises(session):
    member = create_member(session, with_personal_project=False)

    assert ProjectRepository(session).get_personal_project_for_user(member.id) is None
    with pytest.raises(LookupError):
        ProjectRepository(session).get_personal_project_for_user_or_fail(member.id)


@pytest.mark.parametrize(
    "fields, expected",
    [
        ({"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}, "Ada Lovelace <ada@example.com>"),
        ({"first_name": "Ada", "last_name": None, "email": None}, "Ada"),
        ({"first_name": None, "last_name": None, "email": "ada@example.com"}, "ada@example.com"),
        ({"first_name": None, "last_name": None, "email": None}, "Unnamed Project"),
    ],
)
def test_personal_project_name(fields, expected):
    assert personal_project_name(User(**fields)) == expected


def test_owner_defaults_clear_personal_data(session):
    member = create_member(session, mfa_enabled=True, mfa_secret="secret", disabled=True)
    assert not has_owner_shape(member)

    apply_owner_defaults(member)

    assert has_owner_shape(member)
    assert member.role == "global:owner"


def test_owner_placeholder_is_owner_shaped(session):
    owner = UserRepository(session).create_owner_placeholder()
    session.commit()

    assert has_owner_shape(owner)
    assert UserRepository(session).find_owners() == [owner]
