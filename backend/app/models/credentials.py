"""
credentials.py — ORM Models for Credentials and Credential Ownership

Purpose:
- CredentialsEntity stores an (encrypted, opaque) credential payload.
- SharedCredentials links a credential to a project with a role:
    * `credential:owner` — the owning project
    * `credential:user`  — a project allowed to use the credential

Same rule as workflows: `project_id` is not a foreign key, ownership rows may
dangle after a project is deleted.
"""

from sqlalchemy import Column, ForeignKey, String, Text

from app.models.base import Base, created_at_column, id_column, updated_at_column

CREDENTIAL_OWNER_ROLE = "credential:owner"
CREDENTIAL_USER_ROLE = "credential:user"


class CredentialsEntity(Base):
    __tablename__ = "credentials_entity"

    id = id_column()
    name = Column(String(128), nullable=False)
    type = Column(String(128), nullable=False)

    # Encrypted blob; never decrypted here
    data = Column(Text, nullable=False, default="")

    created_at = created_at_column()
    updated_at = updated_at_column()

    def __repr__(self):
        return f"<Credentials {self.name} | {self.type} ({self.id})>"


class SharedCredentials(Base):
    __tablename__ = "shared_credentials"

    credentials_id = Column(
        String(36), ForeignKey("credentials_entity.id", ondelete="CASCADE"), primary_key=True
    )
    project_id = Column(String(36), primary_key=True, index=True)
    role = Column(String(64), nullable=False)

    created_at = created_at_column()
    updated_at = updated_at_column()

    @property
    def resource_id(self) -> str:
        return self.credentials_id

    def __repr__(self):
        return f"<SharedCredentials {self.credentials_id} → {self.project_id} ({self.role})>"
