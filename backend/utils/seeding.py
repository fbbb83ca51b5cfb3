from sqlmodel import Session
from app.services.setting_app_service import SettingAppService
from constants import DEFAULT_SETTINGS
from domain.models.setting import Setting
from utils.logger import get_logger

logger = get_logger(__name__)

def seed_initial_data(session: Session) -> int:
    """初期設定値の投入。既にある設定は上書きしない。投入した件数を返す"""
    service = SettingAppService(session)
    existing = service.get_settings()

    missing = [
        Setting(name=name, value=value)
        for name, value in DEFAULT_SETTINGS.items()
        if name not in existing
    ]
    # 1回のコミットでまとめて投入
    service.repository.insert_many(missing)

    if missing:
        logger.info(f"Seeded {len(missing)} default settings")
    return len(missing)
