"""
Database connection management
"""
from sqlalchemy import create_engine, Engine, text
from sqlalchemy.orm import sessionmaker, Session, scoped_session
from sqlalchemy.pool import QueuePool
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional
from config.settings import settings
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """Owns the engine and session factory"""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.database_url
        self.engine: Engine = None
        self.SessionLocal: sessionmaker = None
        self._initialize()

    def _initialize(self):
        """Create the engine and session factory"""
        try:
            if self.database_url.startswith("sqlite"):
                self._ensure_sqlite_directory()
                self.engine = create_engine(
                    self.database_url,
                    connect_args={"check_same_thread": False},
                    echo=False,
                )
            else:
                self.engine = create_engine(
                    self.database_url,
                    poolclass=QueuePool,
                    pool_size=5,
                    max_overflow=10,
                    pool_pre_ping=True,
                    echo=False,
                )

            self.SessionLocal = scoped_session(
                sessionmaker(
                    autocommit=False,
                    autoflush=False,
                    expire_on_commit=False,
                    bind=self.engine
                )
            )

            logger.info("Database connection initialized")
        except Exception as e:
            logger.error(f"Database connection initialization failed: {str(e)}")
            raise

    def _ensure_sqlite_directory(self):
        """Create the parent directory of a file-backed SQLite database"""
        path = self.database_url.split("///", 1)[-1]
        if path and path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self):
        """Create all tables registered on the declarative base"""
        from immidraft.db.base import Base
        import immidraft.db.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created")

    def get_session(self) -> Session:
        """
        Get a database session

        Returns:
            Session instance
        """
        return self.SessionLocal()

    @contextmanager
    def get_db_session(self) -> Generator[Session, None, None]:
        """
        Session context manager committing on success

        Yields:
            Session instance

        Example:
            with db_manager.get_db_session() as session:
                session.add(record)
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database session error: {str(e)}")
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """
        Check database connectivity

        Returns:
            True when a trivial query succeeds
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.debug("Database connection healthy")
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False

    def close(self):
        """Dispose of the engine"""
        if self.engine:
            self.engine.dispose()
            logger.info("Database connection closed")


# Global database manager instance
db_manager = DatabaseManager()
