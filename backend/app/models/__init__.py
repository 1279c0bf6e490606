"""
ORM models for the workflow instance store.

Importing this package registers every table on `Base.metadata`.
"""

from app.models.base import Base
from app.models.credentials import (
    CREDENTIAL_OWNER_ROLE,
    CREDENTIAL_USER_ROLE,
    CredentialsEntity,
    SharedCredentials,
)
from app.models.project import (
    PERSONAL_PROJECT_TYPE,
    PROJECT_PERSONAL_OWNER_ROLE,
    TEAM_PROJECT_TYPE,
    Project,
    ProjectRelation,
)
from app.models.settings import INSTANCE_OWNER_SET_UP_KEY, Setting
from app.models.user import GLOBAL_MEMBER_ROLE, GLOBAL_OWNER_ROLE, User
from app.models.workflow import (
    WORKFLOW_EDITOR_ROLE,
    WORKFLOW_OWNER_ROLE,
    SharedWorkflow,
    WorkflowEntity,
)

__all__ = [
    "Base",
    "CREDENTIAL_OWNER_ROLE",
    "CREDENTIAL_USER_ROLE",
    "CredentialsEntity",
    "GLOBAL_MEMBER_ROLE",
    "GLOBAL_OWNER_ROLE",
    "INSTANCE_OWNER_SET_UP_KEY",
    "PERSONAL_PROJECT_TYPE",
    "PROJECT_PERSONAL_OWNER_ROLE",
    "Project",
    "ProjectRelation",
    "Setting",
    "SharedCredentials",
    "SharedWorkflow",
    "TEAM_PROJECT_TYPE",
    "User",
    "WORKFLOW_EDITOR_ROLE",
    "WORKFLOW_OWNER_ROLE",
    "WorkflowEntity",
]
