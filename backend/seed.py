import logging
import sys
import os

# Add the current directory to sys.path to ensure imports work correctly
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from config import settings
settings.setup_environment()

from sqlmodel import Session
from app.services.setting_app_service import SettingAppService
from sqlalchemy.exc import SQLAlchemyError
from domain.exceptions import RepositoryError
from infra.database.connection import engine, init_db

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def main():
    logger.info(f"Initializing database at {settings.DATABASE_URL}...")
    try:
        init_db()
        with Session(engine) as session:
            for name, value in SettingAppService(session).get_settings().items():
                logger.info(f"  {name} = {value}")
        logger.info("Seeding completed successfully.")
    except (RepositoryError, SQLAlchemyError) as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
