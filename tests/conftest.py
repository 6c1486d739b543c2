import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard import models  # noqa: F401
from taskboard.config import Settings
from taskboard.database import Base
from taskboard.schemas import ColumnCreate, TaskCreate
from taskboard.services import BoardServices

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        UPLOAD_DIR=str(tmp_path / "uploads"),
        SEED_DEFAULT_COLUMNS=False,
        COLUMN_LOCK_TIMEOUT=5.0,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def services(engine, test_settings) -> BoardServices:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return BoardServices.from_session_factory(TestingSessionLocal, test_settings)


@pytest.fixture
def columns(services):
    """The three default columns, returned as ``(todo, in_progress, done)``."""
    return tuple(services.columns.seed_defaults(["To Do", "In Progress", "Done"]))


def make_task(services: BoardServices, column_id: int, name: str, description: str = ""):
    return services.tasks.create(TaskCreate(name=name, description=description, column_id=column_id))


def make_column(services: BoardServices, name: str):
    return services.columns.create(ColumnCreate(name=name))


def column_positions(services: BoardServices, column_id: int) -> dict:
    """``{task name: sort_order}`` as stored for one column."""
    with services.store.snapshot() as tx:
        return {t.name: t.sort_order for t in tx.get_tasks(column_id)}
