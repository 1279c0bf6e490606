"""
workflow.py — ORM Models for Workflows and Workflow Ownership

Purpose:
- WorkflowEntity stores the workflow definition itself.
- SharedWorkflow links a workflow to a project with a role:
    * `workflow:owner`  — the owning project (every workflow needs one)
    * `workflow:editor` — a project the workflow is shared with

Important Design Rule:
- Ownership is derived entirely from shared_workflow rows.
- `project_id` is deliberately NOT a foreign key: deleting a project can leave a
  dangling row, which the user-management reset detects and heals.
"""

from sqlalchemy import Boolean, Column, ForeignKey, JSON, String

from app.models.base import Base, created_at_column, id_column, updated_at_column

WORKFLOW_OWNER_ROLE = "workflow:owner"
WORKFLOW_EDITOR_ROLE = "workflow:editor"


class WorkflowEntity(Base):
    __tablename__ = "workflow_entity"

    id = id_column()
    name = Column(String(128), nullable=False)
    active = Column(Boolean, nullable=False, default=False)

    # Graph definition (opaque to this package)
    nodes = Column(JSON, nullable=False, default=list)
    connections = Column(JSON, nullable=False, default=dict)

    created_at = created_at_column()
    updated_at = updated_at_column()

    def __repr__(self):
        return f"<Workflow {self.name} ({self.id})>"


class SharedWorkflow(Base):
    __tablename__ = "shared_workflow"

    workflow_id = Column(
        String(36), ForeignKey("workflow_entity.id", ondelete="CASCADE"), primary_key=True
    )
    project_id = Column(String(36), primary_key=True, index=True)
    role = Column(String(64), nullable=False)

    created_at = created_at_column()
    updated_at = updated_at_column()

    @property
    def resource_id(self) -> str:
        return self.workflow_id

    def __repr__(self):
        return f"<SharedWorkflow {self.workflow_id} → {self.project_id} ({self.role})>"
