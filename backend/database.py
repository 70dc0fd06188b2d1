from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from config.catalog_config import CatalogConfig
from exceptions import ConfigurationError, DatabaseConnectionError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Explicit handle on the catalog datastore.

    Owns the engine and session factory. Created once at process start and
    shared read-only by every request afterwards.
    """

    def __init__(self, url: str | None = None, echo: bool | None = None):
        self.url = url if url is not None else CatalogConfig.DATABASE_URL
        if not self.url:
            raise ConfigurationError("Database URL is empty", missing_keys=["CATALOG_DATABASE_URL"])

        is_sqlite = self.url.startswith("sqlite")
        if is_sqlite:
            db_file = make_url(self.url).database
            if db_file and db_file != ":memory:":
                Path(db_file).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(
            self.url,
            connect_args={'check_same_thread': False} if is_sqlite else {},
            echo=CatalogConfig.DATABASE_ECHO if echo is None else echo,
            pool_pre_ping=True,  # Verify connections are alive before using
        )
        if is_sqlite:
            event.listen(self.engine, "connect", _set_sqlite_pragma)

        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

    def connect(self) -> None:
        """
        Verify the datastore is reachable.

        Raises:
            DatabaseConnectionError: If a connection cannot be established
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(self.url, f"Failed to connect to database: {e}") from e
        logger.info(f"Database connected: {self.engine.url.render_as_string(hide_password=True)}")

    def create_all(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    @contextmanager
    def session_scope(self, commit: bool = False) -> Iterator[Session]:
        """
        Provide a session for one unit of work.

        Args:
            commit: Commit on successful exit; reads leave this False

        Yields:
            SQLAlchemy session, rolled back on error and always closed
        """
        db = self.SessionLocal()
        try:
            yield db
            if commit:
                db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
