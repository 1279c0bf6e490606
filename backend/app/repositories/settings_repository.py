"""
Persistence helpers for the `settings` key/value table.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.models.settings import Setting


class SettingsRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, key: str) -> Optional[Setting]:
        return self._session.get(Setting, key)

    def upsert(self, key: str, value: str, load_on_startup: bool = False) -> Setting:
        """
        Insert the setting, or overwrite the value of the existing row.

        `load_on_startup` only applies to newly created rows.
        """
        setting = self.get(key)
        if setting is None:
            setting = Setting(key=key, value=value, load_on_startup=load_on_startup)
            self._session.add(setting)
        else:
            setting.value = value
        self._session.flush()
        return setting
