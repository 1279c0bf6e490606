"""
Factory helpers for arranging store state in tests.

Users are created the way sign-up creates them: each one gets a personal
project. Every helper commits, so the state is visible to the reset's own session.
"""

from __future__ import annotations

import datetime
import itertools
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.models import (
    CREDENTIAL_OWNER_ROLE,
    GLOBAL_MEMBER_ROLE,
    GLOBAL_OWNER_ROLE,
    INSTANCE_OWNER_SET_UP_KEY,
    WORKFLOW_OWNER_ROLE,
    CredentialsEntity,
    Project,
    User,
    WorkflowEntity,
)
from app.repositories import (
    CredentialsRepository,
    ProjectRepository,
    SettingsRepository,
    SharedCredentialsRepository,
    SharedWorkflowRepository,
    UserRepository,
    WorkflowRepository,
)

_BASE_TIME = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
_sequence = itertools.count(1)


def next_created_at() -> datetime.datetime:
    """Strictly increasing timestamps so "oldest owner" is deterministic."""
    return _BASE_TIME + datetime.timedelta(seconds=next(_sequence))


def create_user(session: Session, role: str, with_personal_project: bool = True, **fields: Any) -> User:
    n = next(_sequence)
    defaults: Dict[str, Any] = {
        "email": f"user{n}@example.com",
        "first_name": f"First{n}",
        "last_name": f"Last{n}",
        "password": "$2b$10$hashedpasswordhashedpassword",
        "personalization_answers": {"version": "v4", "companySize": "<20"},
        "created_at": next_created_at(),
    }
    defaults.update(fields)
    user = User(role=role, **defaults)
    UserRepository(session).save(user)
    if with_personal_project:
        ProjectRepository(session).create_personal_project(user)
    session.commit()
    return user


def create_owner(session: Session, **fields: Any) -> User:
    return create_user(session, GLOBAL_OWNER_ROLE, **fields)


def create_member(session: Session, role: str = GLOBAL_MEMBER_ROLE, **fields: Any) -> User:
    """Any non-owner user; `role` may be `global:admin`."""
    return create_user(session, role, **fields)


def personal_project_of(session: Session, user: User) -> Project:
    return ProjectRepository(session).get_personal_project_for_user_or_fail(user.id)


def create_workflow(
    session: Session,
    user: Optional[User] = None,
    project: Optional[Project] = None,
    role: str = WORKFLOW_OWNER_ROLE,
    name: str = "My Workflow",
) -> WorkflowEntity:
    """Create a workflow linked to `project`, or to `user`'s personal project, or to nothing."""
    workflow = WorkflowRepository(session).create(
        name=name,
        nodes=[{"name": "Start", "type": "manualTrigger"}],
        connections={},
    )
    if user is not None and project is None:
        project = personal_project_of(session, user)
    if project is not None:
        SharedWorkflowRepository(session).create(workflow.id, project.id, role)
    session.commit()
    return workflow


def create_credential(
    session: Session,
    user: Optional[User] = None,
    project: Optional[Project] = None,
    role: str = CREDENTIAL_OWNER_ROLE,
    name: str = "foobar",
    type: str = "foobar",
) -> CredentialsEntity:
    """Create a credential linked to `project`, or to `user`'s personal project, or to nothing."""
    credential = CredentialsRepository(session).create(name=name, type=type, data="")
    if user is not None and project is None:
        project = personal_project_of(session, user)
    if project is not None:
        SharedCredentialsRepository(session).create(credential.id, project.id, role)
    session.commit()
    return credential


def set_instance_owner_set_up(session: Session, value: bool) -> None:
    SettingsRepository(session).upsert(
        INSTANCE_OWNER_SET_UP_KEY, "true" if value else "false", load_on_startup=True
    )
    session.commit()
