"""
Repositories: one small class per table family, bound to a SQLAlchemy Session.

Repositories flush but never commit; the caller owns the transaction.
"""

from app.repositories.project_repository import ProjectRelationRepository, ProjectRepository
from app.repositories.settings_repository import SettingsRepository
from app.repositories.shared_resource_repository import (
    CredentialsRepository,
    SharedCredentialsRepository,
    SharedWorkflowRepository,
    WorkflowRepository,
)
from app.repositories.user_repository import UserRepository

__all__ = [
    "CredentialsRepository",
    "ProjectRelationRepository",
    "ProjectRepository",
    "SettingsRepository",
    "SharedCredentialsRepository",
    "SharedWorkflowRepository",
    "UserRepository",
    "WorkflowRepository",
]
