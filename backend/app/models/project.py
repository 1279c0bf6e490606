"""
project.py — ORM Models for Projects and Project Membership

Purpose:
- Represent the containers that own workflows and credentials.
- Two kinds of project:
    * personal — owned 1:1 by exactly one user (role `project:personalOwner`)
    * team     — shared workspace with any number of members
- ProjectRelation links users to projects with a project-scoped role.

Important Design Rule:
- Resource ownership is never stored on the project. It lives in the
  shared_workflow / shared_credentials join tables (see workflow.py, credentials.py).
"""

from sqlalchemy import Column, ForeignKey, String

from app.models.base import Base, created_at_column, id_column, updated_at_column

PERSONAL_PROJECT_TYPE = "personal"
TEAM_PROJECT_TYPE = "team"

PROJECT_PERSONAL_OWNER_ROLE = "project:personalOwner"
PROJECT_ADMIN_ROLE = "project:admin"
PROJECT_EDITOR_ROLE = "project:editor"
PROJECT_VIEWER_ROLE = "project:viewer"

UNNAMED_PROJECT_NAME = "Unnamed Project"


class Project(Base):
    __tablename__ = "project"

    id = id_column()
    name = Column(String(255), nullable=False)
    type = Column(String(36), nullable=False, index=True)

    created_at = created_at_column()
    updated_at = updated_at_column()

    @property
    def is_personal(self) -> bool:
        return self.type == PERSONAL_PROJECT_TYPE

    def __repr__(self):
        return f"<Project {self.name} | {self.type} | {self.id}>"


class ProjectRelation(Base):
    __tablename__ = "project_relation"

    project_id = Column(String(36), ForeignKey("project.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(36), ForeignKey("user.id", ondelete="CASCADE"), primary_key=True, index=True)
    role = Column(String(64), nullable=False)

    created_at = created_at_column()
    updated_at = updated_at_column()

    def __repr__(self):
        return f"<ProjectRelation {self.user_id} → {self.project_id} ({self.role})>"
