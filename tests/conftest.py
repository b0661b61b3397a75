import pytest
from sqlalchemy import text
from sqlmodel import Session

from langswitch.core.database import build_engine, init_db
from langswitch.models import Language, Locale, LocaleTranslation  # noqa: F401
from tests.helpers import SYSTEM_LANGUAGE_ID, create_sample_schema, seed


@pytest.fixture
def engine(tmp_path):
    """A seeded SQLite database with foreign keys enforced."""
    engine = build_engine(f"sqlite:///{tmp_path / 'langswitch.db'}")
    init_db(engine)
    with engine.begin() as connection:
        create_sample_schema(connection)
        seed(connection)
    yield engine
    engine.dispose()


@pytest.fixture
def connection(engine):
    """
    A connection inside a transaction that is rolled back afterwards.

    Foreign key checks are deferred so rows can be re-tagged freely.
    """
    with engine.connect() as connection:
        transaction = connection.begin()
        connection.execute(text("PRAGMA defer_foreign_keys = ON"))
        yield connection
        if transaction.is_active:
            transaction.rollback()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def default_language_id():
    return SYSTEM_LANGUAGE_ID
