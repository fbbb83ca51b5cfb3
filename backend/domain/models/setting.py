from domain.models.base_entity import BaseEntity

class Setting(BaseEntity, table=True):
    __tablename__ = "settings"

    name: str
    value: str

    def __str__(self) -> str:
        return self.name
