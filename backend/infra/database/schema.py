from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from constants import SCHEMA_VERSION
from utils.logger import get_logger

logger = get_logger(__name__)

def get_db_schema_sql() -> str:
    """
    DuckDB には SERIAL 相当の自動採番が無いため、
    サロゲートキーはシーケンスの nextval をデフォルト値として採番します。
    """
    return """
    CREATE SEQUENCE IF NOT EXISTS seq_settings_id START 1;

    CREATE TABLE IF NOT EXISTS settings (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_settings_id'),
        name VARCHAR NOT NULL,
        value VARCHAR NOT NULL
    );

    CREATE TABLE IF NOT EXISTS schema_info (
        key VARCHAR PRIMARY KEY,
        value VARCHAR NOT NULL
    );
    """

def get_current_schema_version(conn) -> int:
    try:
        result = conn.execute(text("SELECT value FROM schema_info WHERE key = 'version'"))
        row = result.fetchone()
        return int(row[0]) if row else 0
    except SQLAlchemyError:
        return 0

def set_schema_version(conn, version: int):
    conn.execute(text("""
        INSERT INTO schema_info (key, value) VALUES ('version', :version)
        ON CONFLICT (key) DO UPDATE SET value = :version
    """), {"version": str(version)})

def init_raw_db(conn_engine: Engine):
    logger.info("Initializing database schema...")
    try:
        with conn_engine.begin() as conn:
            statements = [s.strip() for s in get_db_schema_sql().split(';') if s.strip()]
            for stmt in statements:
                conn.execute(text(stmt))

            current_version = get_current_schema_version(conn)
            if current_version < SCHEMA_VERSION:
                set_schema_version(conn, SCHEMA_VERSION)
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database schema: {e}")
        raise
