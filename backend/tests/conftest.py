import os
import sys
import tempfile
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Keep test logs out of the user data directory; read once at config import
os.environ.setdefault("CATALOG_LOG_DIR", tempfile.mkdtemp(prefix="catalog-logs-"))

# Now import after path is set
import pytest
from fastapi.testclient import TestClient

from database import Database
from init_db import init_database
from main import create_app
from services.author_service import AuthorService
from services.book_instance_service import BookInstanceService
from services.book_service import BookService
from services.catalog_index_service import CatalogIndexService
from services.genre_service import GenreService


@pytest.fixture
def database(tmp_path):
    """File-backed SQLite database with the catalog schema"""
    db = Database(url=f"sqlite:///{tmp_path / 'catalog.db'}", echo=False)
    init_database(db)
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    """Session on the test database; committed on exit"""
    with database.session_scope(commit=True) as session:
        yield session


@pytest.fixture
def author_service(database):
    return AuthorService(database)


@pytest.fixture
def genre_service(database):
    return GenreService(database)


@pytest.fixture
def book_service(database):
    return BookService(database)


@pytest.fixture
def book_instance_service(database):
    return BookInstanceService(database)


@pytest.fixture
def index_service(database):
    return CatalogIndexService(database)


@pytest.fixture
def client(database):
    """HTTP client on an app bound to the test database"""
    with TestClient(create_app(database)) as test_client:
        yield test_client
