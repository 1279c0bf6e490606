"""
user.py — ORM Model for Instance Users

Purpose:
- Represent every account on the workflow instance.
- Carry the global role (`global:owner`, `global:admin`, `global:member`).
- Stores hashed passwords only — never raw.

Owner-shape (state of the single user after a user-management reset):
- role = `global:owner`
- email, first_name, last_name, password, personalization_answers, settings,
  mfa_secret are NULL
- disabled = False, mfa_enabled = False

Used by:
- repositories/user_repository.py
- services/user_management/reset.py
"""

from sqlalchemy import Boolean, Column, JSON, String

from app.models.base import Base, created_at_column, id_column, updated_at_column

GLOBAL_OWNER_ROLE = "global:owner"
GLOBAL_ADMIN_ROLE = "global:admin"
GLOBAL_MEMBER_ROLE = "global:member"


class User(Base):
    __tablename__ = "user"

    id = id_column()

    # Identity / authentication fields — all nullable so a reset owner can exist unclaimed
    email = Column(String(255), unique=True, nullable=True)
    first_name = Column(String(32), nullable=True)
    last_name = Column(String(32), nullable=True)
    password = Column(String(255), nullable=True)

    # Onboarding survey answers and per-user UI settings
    personalization_answers = Column(JSON, nullable=True)
    settings = Column(JSON, nullable=True)

    role = Column(String(64), nullable=False, default=GLOBAL_MEMBER_ROLE, index=True)
    disabled = Column(Boolean, nullable=False, default=False)

    mfa_enabled = Column(Boolean, nullable=False, default=False)
    mfa_secret = Column(String(255), nullable=True)

    created_at = created_at_column()
    updated_at = updated_at_column()

    def __repr__(self):
        return f"<User {self.email or '<unclaimed>'} | {self.role}>"
