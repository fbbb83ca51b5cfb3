from typing import Optional
from sqlmodel import Field, SQLModel

class BaseEntity(SQLModel):
    """永続化されるエンティティの共通基底。id は INSERT 時に DB のシーケンスから採番される。"""
    id: Optional[int] = Field(default=None, primary_key=True)
