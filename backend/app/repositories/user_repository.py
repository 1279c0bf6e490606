"""
Persistence helpers for the `user` table.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.user import GLOBAL_OWNER_ROLE, User


logger = get_logger(__name__)

# Fields cleared on the owner by a reset
OWNER_NULLABLE_FIELDS = (
    "email",
    "first_name",
    "last_name",
    "password",
    "personalization_answers",
    "settings",
    "mfa_secret",
)


class UserRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------ #
    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(User))

    def find_one_by_role(self, role: str) -> Optional[User]:
        return self._session.scalars(
            select(User).where(User.role == role).order_by(User.created_at, User.id).limit(1)
        ).first()

    def find_owners(self) -> List[User]:
        """All `global:owner` rows, oldest first."""
        return list(
            self._session.scalars(
                select(User).where(User.role == GLOBAL_OWNER_ROLE).order_by(User.created_at, User.id)
            )
        )

    def list_ids_except(self, user_id: str) -> List[str]:
        return list(self._session.scalars(select(User.id).where(User.id != user_id)))

    def delete_by_ids(self, user_ids: Iterable[str]) -> int:
        user_ids = list(user_ids)
        if not user_ids:
            return 0
        result = self._session.execute(delete(User).where(User.id.in_(user_ids)))
        return result.rowcount

    # ------------------------------------------------------------------ #
    def save(self, user: User) -> User:
        self._session.add(user)
        self._session.flush()
        return user

    def create_owner_placeholder(self) -> User:
        """Insert an unclaimed owner: role `global:owner`, every personal field NULL."""
        owner = User(role=GLOBAL_OWNER_ROLE)
        apply_owner_defaults(owner)
        logger.debug("Inserting owner placeholder")
        return self.save(owner)


def apply_owner_defaults(user: User) -> User:
    """Reshape `user` in place into the default owner."""
    for field in OWNER_NULLABLE_FIELDS:
        setattr(user, field, None)
    user.role = GLOBAL_OWNER_ROLE
    user.disabled = False
    user.mfa_enabled = False
    return user


def has_owner_shape(user: User) -> bool:
    return (
        user.role == GLOBAL_OWNER_ROLE
        and all(getattr(user, field) is None for field in OWNER_NULLABLE_FIELDS)
        and not user.disabled
        and not user.mfa_enabled
    )
