"""
Persistence helpers for projects and project membership.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models.project import (
    PERSONAL_PROJECT_TYPE,
    PROJECT_PERSONAL_OWNER_ROLE,
    UNNAMED_PROJECT_NAME,
    Project,
    ProjectRelation,
)
from app.models.user import User


def personal_project_name(user: User) -> str:
    """
    Display name for a user's personal project.

    Example:
        "Ada Lovelace <ada@example.com>", or "Unnamed Project" for an unclaimed owner
    """
    full_name = " ".join(part for part in (user.first_name, user.last_name) if part)
    if full_name and user.email:
        return f"{full_name} <{user.email}>"
    return full_name or user.email or UNNAMED_PROJECT_NAME


class ProjectRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------ #
    # Lookups
    def find_personal_projects_for_user(self, user_id: str) -> List[Project]:
        stmt = (
            select(Project)
            .join(ProjectRelation, ProjectRelation.project_id == Project.id)
            .where(
                ProjectRelation.user_id == user_id,
                ProjectRelation.role == PROJECT_PERSONAL_OWNER_ROLE,
                Project.type == PERSONAL_PROJECT_TYPE,
            )
            .order_by(Project.created_at, Project.id)
        )
        return list(self._session.scalars(stmt))

    def get_personal_project_for_user(self, user_id: str) -> Optional[Project]:
        projects = self.find_personal_projects_for_user(user_id)
        return projects[0] if projects else None

    def get_personal_project_for_user_or_fail(self, user_id: str) -> Project:
        project = self.get_personal_project_for_user(user_id)
        if project is None:
            raise LookupError(f"No personal project found for user {user_id}")
        return project

    def find_personal_project_ids_for_users(self, user_ids: Iterable[str]) -> List[str]:
        user_ids = list(user_ids)
        if not user_ids:
            return []
        stmt = (
            select(Project.id)
            .join(ProjectRelation, ProjectRelation.project_id == Project.id)
            .where(
                ProjectRelation.user_id.in_(user_ids),
                ProjectRelation.role == PROJECT_PERSONAL_OWNER_ROLE,
                Project.type == PERSONAL_PROJECT_TYPE,
            )
        )
        return list(self._session.scalars(stmt))

    def all_ids(self) -> Set[str]:
        """Ids of every project currently in the store."""
        return set(self._session.scalars(select(Project.id)))

    # ------------------------------------------------------------------ #
    # Writes
    def create(self, name: str, type: str) -> Project:
        project = Project(name=name, type=type)
        self._session.add(project)
        self._session.flush()
        return project

    def create_personal_project(self, user: User) -> Project:
        """Create a personal project and its `project:personalOwner` relation for `user`."""
        project = self.create(name=personal_project_name(user), type=PERSONAL_PROJECT_TYPE)
        ProjectRelationRepository(self._session).create(
            project_id=project.id, user_id=user.id, role=PROJECT_PERSONAL_OWNER_ROLE
        )
        return project

    def delete_by_ids(self, project_ids: Iterable[str]) -> int:
        project_ids = list(project_ids)
        if not project_ids:
            return 0
        ProjectRelationRepository(self._session).delete_for_projects(project_ids)
        result = self._session.execute(delete(Project).where(Project.id.in_(project_ids)))
        return result.rowcount


class ProjectRelationRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, project_id: str, user_id: str, role: str) -> ProjectRelation:
        relation = ProjectRelation(project_id=project_id, user_id=user_id, role=role)
        self._session.add(relation)
        self._session.flush()
        return relation

    def delete_for_users(self, user_ids: Iterable[str]) -> int:
        user_ids = list(user_ids)
        if not user_ids:
            return 0
        result = self._session.execute(
            delete(ProjectRelation).where(ProjectRelation.user_id.in_(user_ids))
        )
        return result.rowcount

    def delete_dangling(self) -> int:
        """Remove memberships whose project no longer exists."""
        result = self._session.execute(
            delete(ProjectRelation).where(ProjectRelation.project_id.not_in(select(Project.id)))
        )
        return result.rowcount

    def delete_for_projects(self, project_ids: Iterable[str]) -> int:
        project_ids = list(project_ids)
        if not project_ids:
            return 0
        result = self._session.execute(
            delete(ProjectRelation).where(ProjectRelation.project_id.in_(project_ids))
        )
        return result.rowcount
