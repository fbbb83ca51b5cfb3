from typing import Dict, Optional
from sqlmodel import Session
from domain.models.setting import Setting
from domain.repositories.repository import Repository
from infra.repositories.sqlmodel_repository import SqlModelRepository
from schemas.settings import SettingUpdate

def normalize_name(name: Optional[str]) -> str:
    return (name or "").strip().lower()

class SettingAppService:
    def __init__(self, session: Session, repository: Optional[Repository[Setting]] = None):
        self.session = session
        self.repository = repository or SqlModelRepository(session, Setting)

    def get_settings(self) -> Dict[str, str]:
        settings = self.repository.table_no_tracking.order_by(Setting.name).all()
        return {s.name: s.value for s in settings}

    def get_setting_by_name(self, name: Optional[str]) -> Optional[Setting]:
        key = normalize_name(name)
        if not key:
            return None
        return self.repository.table.where(Setting.name == key).first()

    def get_setting_value(self, name: str, default: str = "") -> str:
        setting = self.get_setting_by_name(name)
        if setting:
            return setting.value
        return default

    def set_setting(self, name: str, value: str) -> Setting:
        # 既存なら追跡中のインスタンスを書き換えて update、無ければ insert
        setting = self.get_setting_by_name(name)
        if setting:
            setting.value = value
            self.repository.update(setting)
        else:
            setting = Setting(name=normalize_name(name), value=value)
            self.repository.insert(setting)
        return setting

    def update_setting(self, setting_update: SettingUpdate) -> Dict[str, str]:
        saved_setting = self.set_setting(setting_update.name, setting_update.value)
        return {"name": saved_setting.name, "value": saved_setting.value}

    def delete_setting(self, name: str) -> bool:
        setting = self.get_setting_by_name(name)
        if not setting:
            return False
        self.repository.delete(setting)
        return True
