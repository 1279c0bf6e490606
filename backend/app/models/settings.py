"""
settings.py — ORM Model for Persistent Instance Settings

Purpose:
- Key/value store for instance-wide flags read at startup.
- The user-management reset writes `userManagement.isInstanceOwnerSetUp`.

Values are stored as strings; booleans are "true" / "false".
"""

from sqlalchemy import Boolean, Column, String, Text

from app.models.base import Base

INSTANCE_OWNER_SET_UP_KEY = "userManagement.isInstanceOwnerSetUp"


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    load_on_startup = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Setting {self.key}={self.value!r}>"
