from typing import Optional

from portfolio.db.base import Setting
from portfolio.domain.interfaces import ISettingsRepository


class SettingsRepository(ISettingsRepository):
    """Key/value access to the ``settings`` table."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_value(self, key: str) -> Optional[str]:
        setting = self.db.get(Setting, key)
        return setting.setting_value if setting else None

    def put_value(self, key: str, value: str) -> None:
        setting = self.db.get(Setting, key)
        if setting is None:
            self.db.add(Setting(setting_key=key, setting_value=value))
        else:
            setting.setting_value = value
        self.db.flush()
