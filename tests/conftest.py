import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")

# Settings are read at import time; point the app at the test database and
# keep uploads out of the working tree.
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("DB_CREATE_ALL", "false")

from app.api.deps import get_import_service  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.base import Base  # noqa: E402
from app.services.importer import TransactionImportService  # noqa: E402


def _make_engine():
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine
    return create_async_engine(TEST_DATABASE_URL, echo=False)


@pytest.fixture
async def test_engine():
    """Create tables on a fresh engine for each test, and drop them after."""
    from app import models  # noqa: F401

    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    """Provide test database session."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def upload_folder(tmp_path: Path) -> Path:
    """Per-test upload folder."""
    folder = tmp_path / "uploads"
    folder.mkdir()
    return folder


@pytest.fixture
def write_csv(upload_folder: Path):
    """Write CSV text into the upload folder and return the file name."""

    def _write(content: str, name: str = "import.csv") -> str:
        (upload_folder / name).write_text(content, encoding="utf-8")
        return name

    return _write


@pytest.fixture
async def client(db_session: AsyncSession, upload_folder: Path):
    """Provide test client with database and upload folder overrides."""

    async def override_get_db():
        yield db_session

    async def override_get_import_service():
        return TransactionImportService(db_session, upload_folder=upload_folder)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_import_service] = override_get_import_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
