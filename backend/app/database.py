# backend/app/database.py
from datetime import datetime
import logging
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker

from .core.config import settings

logger = logging.getLogger(__name__)


def _engine_kwargs(database_url: str) -> dict[str, Any]:
    if database_url.startswith("sqlite"):
        # SQLite connections are shared across the FastAPI threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 10,  # Number of persistent connections
        "max_overflow": 10,  # Maximum overflow connections
        "pool_timeout": 30,  # Timeout for getting connection
        "pool_recycle": 3600,  # Recycle connections after 1 hour
        "pool_pre_ping": True,  # Test connections before using
    }


engine: Engine = create_engine(
    settings.database_url,
    echo=settings.database_echo,
    **_engine_kwargs(settings.database_url),
)


def configure_sqlite(target: Engine) -> None:
    """
    Enforce foreign keys and let SQLAlchemy own BEGIN so SAVEPOINTs work.

    pysqlite otherwise defers BEGIN until the first DML statement, which
    breaks nested transactions.
    """

    @event.listens_for(target, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(target, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


@event.listens_for(engine, "connect")
def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
    connection_record.info["connect_time"] = datetime.now()
    logger.debug("Database connection established")


if settings.database_url.startswith("sqlite"):
    configure_sqlite(engine)


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
