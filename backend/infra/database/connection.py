from typing import Optional
from sqlmodel import create_engine, Session
from sqlalchemy.engine import Engine, make_url
import os
import threading
from config import settings
from infra.database.schema import init_raw_db
from utils.logger import get_logger

logger = get_logger(__name__)


def ensure_database_dir(url: str) -> Optional[str]:
    """DuckDB のファイル DB なら、URL が指すファイルの親ディレクトリを作成する"""
    parsed = make_url(url)
    if parsed.get_backend_name() != "duckdb":
        return None
    database = parsed.database
    if not database or database == ":memory:":
        return None
    directory = os.path.dirname(database)
    if not directory:
        return None
    os.makedirs(directory, exist_ok=True)
    return directory


# DBパス設定
DB_PATH = settings.DB_PATH
DATABASE_URL = settings.DATABASE_URL
ensure_database_dir(DATABASE_URL)

def build_engine(url: str, echo: bool = False) -> Engine:
    # DuckDB 以外の URL でもそのまま動くよう、接続設定は DuckDB の時だけ渡す
    if url.startswith("duckdb"):
        connect_args = {'config': {'worker_threads': 4, 'access_mode': 'READ_WRITE'}}
        return create_engine(
            url,
            pool_size=5,
            max_overflow=10,
            connect_args=connect_args,
            echo=echo,
        )
    return create_engine(url, echo=echo)

engine = build_engine(DATABASE_URL, echo=settings.SQL_ECHO)

db_lock = threading.RLock()

def init_db(conn_engine: Optional[Engine] = None):
    """
    アプリケーション起動時のDB初期化フロー。
    1. Raw SQL でテーブルとシーケンスを作成
    2. 初期設定値の投入
    """
    from utils.seeding import seed_initial_data

    target = conn_engine or engine
    with db_lock:
        init_raw_db(target)
        with Session(target) as session:
            seed_initial_data(session)
    logger.info("Database initialized")

def close_db():
    """データベース接続を終了する。"""
    engine.dispose()

def get_session():
    """
    1つの作業単位 (リクエスト等) ごとにセッションを払い出す。
    リポジトリはこのセッションを参照するだけで、生成・破棄は呼び出し側の責務。
    """
    with Session(engine) as session:
        yield session
