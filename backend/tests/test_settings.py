import pytest
from pydantic import ValidationError
from sqlmodel import Session
from app.services.setting_app_service import SettingAppService
from domain.exceptions import PersistenceError
from domain.repositories.repository import Repository
from models import Setting
from schemas.settings import SettingUpdate

@pytest.fixture(name="service")
def service_fixture(session: Session) -> SettingAppService:
    return SettingAppService(session)

def test_setting_str_is_name():
    setting = Setting(name="site.title", value="MySite")
    assert str(setting) == "site.title"
    assert setting.id is None

def test_get_settings(service: SettingAppService, session: Session):
    s = Setting(name="k", value="v")
    session.add(s)
    session.commit()

    assert service.get_settings() == {"k": "v"}

def test_set_setting_inserts_normalized_name(service: SettingAppService):
    saved = service.set_setting("  Site.Title ", "MySite")

    assert saved.id is not None
    assert saved.name == "site.title"
    assert service.get_setting_value("SITE.TITLE") == "MySite"

def test_set_setting_updates_existing_row(service: SettingAppService, session: Session):
    first = service.set_setting("site.title", "MySite")
    first_id = first.id

    second = service.set_setting("site.title", "MySite2")

    assert second.id == first_id
    session.expire_all()
    assert service.get_setting_value("site.title") == "MySite2"
    assert len(service.get_settings()) == 1

def test_get_setting_value_default(service: SettingAppService):
    assert service.get_setting_value("missing") == ""
    assert service.get_setting_value("missing", default="fallback") == "fallback"

def test_get_setting_by_name_blank(service: SettingAppService):
    assert service.get_setting_by_name(None) is None
    assert service.get_setting_by_name("   ") is None

def test_update_setting(service: SettingAppService):
    result = service.update_setting(SettingUpdate(name="New_K", value="new_v"))

    assert result == {"name": "new_k", "value": "new_v"}
    assert service.get_setting_by_name("new_k").value == "new_v"

def test_setting_update_rejects_blank_name():
    with pytest.raises(ValidationError):
        SettingUpdate(name="   ", value="v")
    with pytest.raises(ValidationError):
        SettingUpdate(name="", value="v")

def test_delete_setting(service: SettingAppService):
    service.set_setting("site.title", "MySite")

    assert service.delete_setting("site.title") is True
    assert service.get_setting_by_name("site.title") is None
    assert service.delete_setting("site.title") is False

def test_service_uses_injected_repository(session: Session, mocker):
    repository = mocker.Mock(spec=Repository)
    repository.table.where.return_value.first.return_value = None
    service = SettingAppService(session, repository=repository)

    service.set_setting("site.title", "MySite")

    repository.insert.assert_called_once()
    inserted = repository.insert.call_args.args[0]
    assert (inserted.name, inserted.value) == ("site.title", "MySite")

def test_service_propagates_persistence_errors(service: SettingAppService, session: Session, mocker):
    mocker.patch.object(session, "commit", side_effect=RuntimeError("disk full"))

    with pytest.raises(PersistenceError, match="disk full"):
        service.set_setting("site.title", "MySite")
