import os
import pytest
import sys
import tempfile
import uuid
from typing import Generator

# 1. パス解決: backendディレクトリをsys.pathに追加
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(CURRENT_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# 2. アプリのモジュールを読み込む前に、ユーザーデータディレクトリを使わないよう環境変数を差し替え
TEST_DATA_DIR = tempfile.mkdtemp(prefix="green_test_")
os.environ["DB_PATH"] = os.path.join(TEST_DATA_DIR, "green.duckdb")
os.environ["GREEN_LOG_DIR"] = os.path.join(TEST_DATA_DIR, "logs")

from sqlalchemy.engine import Engine
from sqlmodel import Session

import infra.database.connection as db_connection
from infra.database.schema import init_raw_db
from infra.repositories.sqlmodel_repository import SqlModelRepository
from models import Setting

@pytest.fixture(name="engine", scope="function")
def engine_fixture() -> Generator[Engine, None, None]:
    """
    テストごとに完全に独立したDB環境（物理ファイル）を構築する。
    """
    unique_id = str(uuid.uuid4())
    test_db_path = os.path.join(tempfile.gettempdir(), f"green_test_{unique_id}.duckdb")

    engine = db_connection.build_engine(f"duckdb:///{test_db_path}")

    # Raw SQLでテーブルとシーケンスを直接作成 (初期データは投入しない)
    init_raw_db(engine)

    yield engine

    # テスト終了後のクリーンアップ
    engine.dispose()
    for path in (test_db_path, f"{test_db_path}.wal"):
        if os.path.exists(path):
            try:
                os.remove(path)
            except OSError:
                pass

@pytest.fixture(name="session")
def session_fixture(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session

@pytest.fixture(name="repository")
def repository_fixture(session: Session) -> SqlModelRepository[Setting]:
    return SqlModelRepository(session, Setting)
