import logging
import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from taskboard.config import PROJECT_ROOT, settings

logger = logging.getLogger(__name__)

# Default to a local SQLite database if no DATABASE_URL is provided or usable
DEFAULT_DB_PATH = os.path.join(PROJECT_ROOT, "taskboard.db")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    """SQLite ignores FOREIGN KEY clauses unless asked per connection."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url=None):
    """Create the SQLAlchemy engine, preferring the configured DATABASE_URL."""
    database_url = database_url or settings.DATABASE_URL

    if database_url:
        if database_url.startswith("sqlite"):
            return create_engine(database_url, connect_args={"check_same_thread": False})
        try:
            engine = create_engine(database_url, pool_pre_ping=True)
            # Ensure the target database is reachable; otherwise fall back to SQLite
            with engine.connect():
                pass
            return engine
        except ModuleNotFoundError as exc:
            # Some SQL drivers (e.g. psycopg2) might be missing in the execution environment.
            logger.warning("Database driver unavailable for %s (%s); using SQLite", database_url, exc)
        except Exception as exc:
            logger.warning("Database %s unreachable (%s); using SQLite", database_url, exc)

    # Fall back to SQLite stored in the project root
    sqlite_url = f"sqlite:///{DEFAULT_DB_PATH}"
    return create_engine(sqlite_url, connect_args={"check_same_thread": False})


engine = build_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for the board models
Base = declarative_base()
