from pydantic import BaseModel, Field, field_validator

class SettingUpdate(BaseModel):
    """設定値の更新リクエスト。name は前後の空白を除去し小文字に正規化する"""
    name: str = Field(min_length=1, max_length=200)
    value: str

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("name must not be blank")
        return v
