# Import moved models
from domain.models.base_entity import BaseEntity
from domain.models.setting import Setting

__all__ = ["BaseEntity", "Setting"]
