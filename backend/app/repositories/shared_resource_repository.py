"""
Persistence helpers for workflows, credentials and their ownership join tables.

Workflows and credentials are handled by the same code: each resource table has a
`shared_*` table keyed by (resource id, project id) carrying a role.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models.credentials import CREDENTIAL_OWNER_ROLE, CredentialsEntity, SharedCredentials
from app.models.workflow import WORKFLOW_OWNER_ROLE, SharedWorkflow, WorkflowEntity


class ResourceRepository:
    """Read/insert access to a resource table (workflows or credentials)."""

    model: Any = None

    def __init__(self, session: Session) -> None:
        self._session = session

    def all_ids(self) -> List[str]:
        return list(self._session.scalars(select(self.model.id).order_by(self.model.id)))

    def create(self, **fields: Any) -> Any:
        resource = self.model(**fields)
        self._session.add(resource)
        self._session.flush()
        return resource


class WorkflowRepository(ResourceRepository):
    model = WorkflowEntity


class CredentialsRepository(ResourceRepository):
    model = CredentialsEntity


class SharedResourceRepository:
    """
    Access to one ownership join table.

    Subclasses set the join model, the name of its resource-id column and the
    role that marks the owning project.
    """

    model: Any = None
    resource_column: str = ""
    owner_role: str = ""

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def _resource_col(self):
        return getattr(self.model, self.resource_column)

    # ------------------------------------------------------------------ #
    def find_by_resource_ids(self, resource_ids: Iterable[str]) -> List[Any]:
        resource_ids = list(resource_ids)
        if not resource_ids:
            return []
        stmt = (
            select(self.model)
            .where(self._resource_col.in_(resource_ids))
            .order_by(self._resource_col, self.model.created_at, self.model.project_id)
        )
        return list(self._session.scalars(stmt))

    def find_one_by(self, resource_id: str, project_id: Optional[str] = None) -> Optional[Any]:
        stmt = select(self.model).where(self._resource_col == resource_id)
        if project_id is not None:
            stmt = stmt.where(self.model.project_id == project_id)
        return self._session.scalars(stmt.order_by(self.model.created_at).limit(1)).first()

    def group_by_resource(self) -> Dict[str, List[Any]]:
        """Every join row, grouped by resource id."""
        grouped: Dict[str, List[Any]] = defaultdict(list)
        stmt = select(self.model).order_by(self._resource_col, self.model.created_at, self.model.project_id)
        for row in self._session.scalars(stmt):
            grouped[row.resource_id].append(row)
        return grouped

    # ------------------------------------------------------------------ #
    def create(self, resource_id: str, project_id: str, role: Optional[str] = None) -> Any:
        row = self.model(**{
            self.resource_column: resource_id,
            "project_id": project_id,
            "role": role or self.owner_role,
        })
        self._session.add(row)
        self._session.flush()
        return row

    def set_role(self, row: Any, role: str) -> Any:
        row.role = role
        self._session.flush()
        return row

    def delete_rows(self, rows: Iterable[Any]) -> int:
        count = 0
        for row in rows:
            self._session.delete(row)
            count += 1
        if count:
            self._session.flush()
        return count

    def delete_by_resource_id(self, resource_id: str) -> int:
        result = self._session.execute(delete(self.model).where(self._resource_col == resource_id))
        return result.rowcount


class SharedWorkflowRepository(SharedResourceRepository):
    model = SharedWorkflow
    resource_column = "workflow_id"
    owner_role = WORKFLOW_OWNER_ROLE


class SharedCredentialsRepository(SharedResourceRepository):
    model = SharedCredentials
    resource_column = "credentials_id"
    owner_role = CREDENTIAL_OWNER_ROLE
