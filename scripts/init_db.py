"""
Database initialization script

Creates every table and seeds the bundled visa criteria. With --reset the
existing tables are dropped first.
"""
import argparse
import sys
import os

# Project root on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config.settings import settings
from immidraft.db.base import Base
from immidraft.db.connection import db_manager
from immidraft.services.criteria_service import criteria_service
from immidraft.utils.logger import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)


def init_database(reset: bool = False):
    """Create tables and seed reference data"""
    try:
        if reset:
            import immidraft.db.models  # noqa: F401
            Base.metadata.drop_all(bind=db_manager.engine)
            logger.warning("Existing tables dropped")

        db_manager.create_tables()
        seeded = criteria_service.seed_default_criteria()
        logger.info(f"Database initialized: {settings.database_url} ({seeded} criteria seeded)")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise
    finally:
        db_manager.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the ImmiDraft database")
    parser.add_argument("--reset", action="store_true", help="drop existing tables first")
    args = parser.parse_args()
    init_database(reset=args.reset)
