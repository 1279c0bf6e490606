"""
reset.py — Reset the Instance to its Default User State

Purpose:
- Bring the store back to a "fresh install" user state:
    * exactly one user, the unclaimed instance owner
    * the instance-owner-set-up flag cleared
    * the owner holds exactly one personal project
    * every workflow and credential owned by a project that still exists
- Heal ownership links left behind by deleted users and deleted projects.

Core Workflow (one transaction, phases strictly in order):
1. reset_users               → keep/insert the owner, delete everybody else
2. reset_settings            → userManagement.isInstanceOwnerSetUp = "false"
3. ensure_personal_project   → find or create the owner's personal project
4. reown_workflows / reown_credentials → repair missing and dangling links
5. verify                    → re-check the invariants before commit

Every phase re-derives state from the store; nothing is cached between runs, so
the command can simply be re-run after a failure.

This module does NOT:
- Parse CLI arguments or set exit codes (see app/commands/user_management_reset.py).
- Touch workflow or credential rows themselves, only their ownership rows.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.database import session_scope
from app.core.exceptions import IntegrityViolation, translate_store_error
from app.core.logging import get_logger
from app.models.project import Project
from app.models.settings import INSTANCE_OWNER_SET_UP_KEY
from app.models.user import GLOBAL_OWNER_ROLE, User
from app.repositories.project_repository import ProjectRelationRepository, ProjectRepository
from app.repositories.settings_repository import SettingsRepository
from app.repositories.shared_resource_repository import (
    CredentialsRepository,
    ResourceRepository,
    SharedCredentialsRepository,
    SharedResourceRepository,
    SharedWorkflowRepository,
    WorkflowRepository,
)
from app.repositories.user_repository import UserRepository, apply_owner_defaults, has_owner_shape


logger = get_logger(__name__)

SETUP_FLAG_FALSE = "false"


@dataclass
class ResetReport:
    """Outcome of one reset run."""

    owner_id: str
    personal_project_id: str
    owner_created: bool = False
    users_deleted: int = 0
    projects_deleted: int = 0
    personal_project_created: bool = False
    workflows_reowned: int = 0
    credentials_reowned: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# -----------------------------------------------------------------------------
# Phase 1 — Users
# -----------------------------------------------------------------------------

def reset_users(session: Session, report: Optional[Dict[str, Any]] = None) -> User:
    """
    Leave exactly one user in the store: the instance owner, owner-shaped.

    The oldest `global:owner` row is kept so its personal project (and its id)
    survives. Every other user is deleted together with their project
    memberships and the personal projects they held. When there is no owner,
    a placeholder owner is inserted.
    """
    users = UserRepository(session)
    projects = ProjectRepository(session)
    stats = report if report is not None else {}

    owners = users.find_owners()
    if owners:
        owner = owners[0]
        if len(owners) > 1:
            logger.warning(
                "Found %d users with the owner role; keeping the oldest (%s)", len(owners), owner.id
            )
        stats["owner_created"] = False
    else:
        logger.info("No instance owner found, creating one")
        owner = users.create_owner_placeholder()
        stats["owner_created"] = True

    doomed_ids = users.list_ids_except(owner.id)
    kept_projects = {p.id for p in projects.find_personal_projects_for_user(owner.id)}
    doomed_projects = [
        project_id
        for project_id in projects.find_personal_project_ids_for_users(doomed_ids)
        if project_id not in kept_projects
    ]

    ProjectRelationRepository(session).delete_for_users(doomed_ids)
    stats["projects_deleted"] = projects.delete_by_ids(doomed_projects)
    stats["users_deleted"] = users.delete_by_ids(doomed_ids)

    apply_owner_defaults(owner)
    users.save(owner)

    logger.info(
        "Users reset: kept owner %s, deleted %d users and %d personal projects",
        owner.id, stats["users_deleted"], stats["projects_deleted"],
    )
    return owner


# -----------------------------------------------------------------------------
# Phase 2 — Settings
# -----------------------------------------------------------------------------

def reset_settings(session: Session) -> None:
    """Mark the instance owner as not set up."""
    SettingsRepository(session).upsert(
        INSTANCE_OWNER_SET_UP_KEY, SETUP_FLAG_FALSE, load_on_startup=True
    )
    logger.info("Setting %s = %s", INSTANCE_OWNER_SET_UP_KEY, SETUP_FLAG_FALSE)


# -----------------------------------------------------------------------------
# Phase 3 — Personal project
# -----------------------------------------------------------------------------

def ensure_personal_project(session: Session, owner: User) -> Tuple[Project, bool]:
    """
    Return the owner's personal project, creating it when absent.

    Returns:
        (project, created)

    Raises:
        IntegrityViolation: the owner holds more than one personal project.
    """
    projects = ProjectRepository(session)
    pruned = ProjectRelationRepository(session).delete_dangling()
    if pruned:
        logger.info("Removed %d project memberships pointing at deleted projects", pruned)

    existing = projects.find_personal_projects_for_user(owner.id)

    if len(existing) > 1:
        raise IntegrityViolation(
            f"Owner {owner.id} has {len(existing)} personal projects "
            f"({', '.join(p.id for p in existing)}); refusing to pick one"
        )
    if existing:
        logger.info("Owner personal project %s already present", existing[0].id)
        return existing[0], False

    project = projects.create_personal_project(owner)
    logger.info("Created personal project %s for owner %s", project.id, owner.id)
    return project, True


# -----------------------------------------------------------------------------
# Phase 4 — Re-ownership
# -----------------------------------------------------------------------------

def _reown(
    resources: ResourceRepository,
    shared: SharedResourceRepository,
    project: Project,
    existing_project_ids: Set[str],
) -> int:
    """
    Drive every resource to an owner link on an existing project.

    Per resource:
    - sharing rows (non-owner role) on a missing project are removed
    - a dangling owner row, or no valid owner row at all → owner link to `project`
    - only valid owner rows → untouched (several of them are left as they are)
    """
    links_by_resource = shared.group_by_resource()
    reowned = 0

    for resource_id in resources.all_ids():
        links = links_by_resource.get(resource_id, [])
        dangling = [link for link in links if link.project_id not in existing_project_ids]
        valid = [link for link in links if link.project_id in existing_project_ids]

        dangling_owner = [link for link in dangling if link.role == shared.owner_role]
        valid_owner = [link for link in valid if link.role == shared.owner_role]

        shared.delete_rows(link for link in dangling if link.role != shared.owner_role)

        if valid_owner and not dangling_owner:
            continue
        if any(link.project_id == project.id for link in valid_owner):
            # Already owned by the target; the dangling duplicates just go.
            shared.delete_rows(dangling_owner)
            continue

        shared.delete_rows(dangling_owner)
        target = next((link for link in valid if link.project_id == project.id), None)
        if target is not None:
            logger.debug("Promoting %s on %s to %s", target.role, resource_id, shared.owner_role)
            shared.set_role(target, shared.owner_role)
        else:
            shared.create(resource_id, project.id, shared.owner_role)

        state = "dangling" if dangling_owner else "unlinked"
        logger.debug(
            "Re-owned %s %s (%s) to project %s",
            resources.model.__tablename__, resource_id, state, project.id,
        )
        reowned += 1

    return reowned


def reown_workflows(session: Session, project: Project) -> int:
    count = _reown(
        WorkflowRepository(session),
        SharedWorkflowRepository(session),
        project,
        ProjectRepository(session).all_ids(),
    )
    logger.info("Re-owned %d workflows to project %s", count, project.id)
    return count


def reown_credentials(session: Session, project: Project) -> int:
    count = _reown(
        CredentialsRepository(session),
        SharedCredentialsRepository(session),
        project,
        ProjectRepository(session).all_ids(),
    )
    logger.info("Re-owned %d credentials to project %s", count, project.id)
    return count


# -----------------------------------------------------------------------------
# Post-conditions
# -----------------------------------------------------------------------------

def verify(session: Session) -> None:
    """
    Re-check the reset invariants against the store.

    Raises:
        IntegrityViolation: listing every invariant that does not hold.
    """
    problems: List[str] = []
    users = UserRepository(session)

    user_count = users.count()
    owner = users.find_one_by_role(GLOBAL_OWNER_ROLE)
    if user_count != 1 or owner is None:
        problems.append(f"expected exactly one owner, found {user_count} users")
    elif not has_owner_shape(owner):
        problems.append(f"owner {owner.id} still carries personal data")

    if owner is not None:
        personal = ProjectRepository(session).find_personal_projects_for_user(owner.id)
        if len(personal) != 1:
            problems.append(f"owner has {len(personal)} personal projects")

    project_ids = ProjectRepository(session).all_ids()
    for resources, shared in (
        (WorkflowRepository(session), SharedWorkflowRepository(session)),
        (CredentialsRepository(session), SharedCredentialsRepository(session)),
    ):
        links = shared.group_by_resource()
        orphans = [
            resource_id
            for resource_id in resources.all_ids()
            if not any(
                link.role == shared.owner_role and link.project_id in project_ids
                for link in links.get(resource_id, [])
            )
        ]
        if orphans:
            problems.append(f"{len(orphans)} {resources.model.__tablename__} rows without an owner")

    if problems:
        raise IntegrityViolation("Reset post-conditions failed: " + "; ".join(problems))


# -----------------------------------------------------------------------------
# Orchestration
# -----------------------------------------------------------------------------

class UserManagementReset:
    """
    Runs the reset phases against a session factory in one transaction.

    Usage:
        report = UserManagementReset(SessionLocal).run()
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def run(self) -> ResetReport:
        """
        Execute all phases; commit only if every phase and `verify` succeed.

        Raises:
            StoreUnavailable: connectivity / transaction failure (store rolled back).
            IntegrityViolation: invariant cannot be established (store rolled back).
        """
        try:
            with session_scope(self._session_factory) as session:
                report = self._run_phases(session)
        except SQLAlchemyError as exc:
            raise translate_store_error(exc) from exc

        logger.info("Successfully reset the database to default user state.")
        return report

    def _run_phases(self, session: Session) -> ResetReport:
        stats: Dict[str, Any] = {}

        owner = reset_users(session, stats)
        reset_settings(session)
        project, created = ensure_personal_project(session, owner)
        workflows = reown_workflows(session, project)
        credentials = reown_credentials(session, project)
        verify(session)

        return ResetReport(
            owner_id=owner.id,
            personal_project_id=project.id,
            owner_created=stats.get("owner_created", False),
            users_deleted=stats.get("users_deleted", 0),
            projects_deleted=stats.get("projects_deleted", 0),
            personal_project_created=created,
            workflows_reowned=workflows,
            credentials_reowned=credentials,
        )
