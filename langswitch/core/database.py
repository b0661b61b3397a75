from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine
from langswitch.core.config import settings
import logging

logger = logging.getLogger(__name__)

_engine = None


def normalize_database_url(db_url: str) -> str:
    """SQLAlchemy prefers postgresql:// over postgres://."""
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)
    return db_url


def _enable_sqlite_transactions(engine: Engine) -> None:
    """
    Make pysqlite honour foreign keys and real transactions.

    pysqlite defers BEGIN until the first DML statement, so PRAGMAs issued
    at the start of a transaction would otherwise run in autocommit mode.
    """
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(db_url: str, echo: bool = False) -> Engine:
    """Create an engine for ``db_url``."""
    db_url = normalize_database_url(db_url)
    logger.info(f"Connecting to database: {db_url[:20]}...")  # Log partial URL for debugging

    if db_url.startswith("sqlite"):
        engine = create_engine(db_url, echo=echo)
        _enable_sqlite_transactions(engine)
        return engine

    return create_engine(
        db_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before using
    )


def get_engine() -> Engine:
    """Return the engine configured by DATABASE_URL, creating it on first use."""
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL environment variable is required")
        _engine = build_engine(settings.database_url, echo=settings.echo_sql)
    return _engine


def init_db(engine: Engine) -> None:
    """Create the locale and language tables."""
    SQLModel.metadata.create_all(engine)
