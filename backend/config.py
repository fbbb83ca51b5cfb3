import os
from pydantic_settings import BaseSettings
from pydantic import Field
import platformdirs

APP_NAME = "Green"
APP_AUTHOR = "GreenDev"

class Settings(BaseSettings):
    # App Info
    APP_NAME: str = APP_NAME
    APP_AUTHOR: str = APP_AUTHOR
    ENV: str = "prod"

    # Paths
    # デフォルトは platformdirs を使用するが、環境変数 DB_PATH があればそれを優先する
    USER_DATA_DIR: str = Field(default_factory=lambda: platformdirs.user_data_dir(APP_NAME, APP_AUTHOR))
    DB_PATH: str | None = None

    # Database
    # DATABASE_URL が未設定なら DB_PATH から DuckDB の URL を組み立てる
    DATABASE_URL: str | None = None
    SQL_ECHO: bool = False

    # Logging
    GREEN_LOG_DIR: str | None = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    def model_post_init(self, __context):
        if not self.DB_PATH:
            self.DB_PATH = os.path.join(self.USER_DATA_DIR, "green.duckdb")

        if not self.DATABASE_URL:
            self.DATABASE_URL = f"duckdb:///{self.DB_PATH}"

        if not self.GREEN_LOG_DIR:
            self.GREEN_LOG_DIR = os.path.join(self.USER_DATA_DIR, "logs")

    def setup_environment(self):
        """ロガーが参照する環境変数を設定する"""
        if self.GREEN_LOG_DIR:
            os.environ["GREEN_LOG_DIR"] = self.GREEN_LOG_DIR

settings = Settings()
