from sqlalchemy import inspect
import logging

from database import Database, Base
import models  # noqa: F401  registers the catalog tables on Base.metadata

logger = logging.getLogger(__name__)


def _missing_tables(database: Database) -> list:
    """Catalog tables not yet present in the datastore"""
    existing = set(inspect(database.engine).get_table_names())
    return [name for name in Base.metadata.tables if name not in existing]


def init_database(database: Database) -> None:
    """
    Create the catalog schema.

    Safe to run on every startup: existing tables are left untouched.
    """
    missing = _missing_tables(database)
    if not missing:
        logger.info("Database schema up to date")
        return

    logger.info(f"Creating tables: {', '.join(sorted(missing))}")
    database.create_all()
    logger.info("Database initialized")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    db = Database()
    db.connect()
    init_database(db)
    db.dispose()
