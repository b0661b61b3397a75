"""
Temporarily relax foreign key enforcement inside a transaction.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from langswitch.core.exceptions import UnsupportedDatabaseError

logger = logging.getLogger(__name__)

# dialect name -> (relax statement, restore statement)
RELAXATION_STATEMENTS = {
    "sqlite": (
        "PRAGMA defer_foreign_keys = ON",
        "PRAGMA defer_foreign_keys = OFF",
    ),
    "mysql": (
        "SET foreign_key_checks = 0",
        "SET foreign_key_checks = 1",
    ),
    "mariadb": (
        "SET foreign_key_checks = 0",
        "SET foreign_key_checks = 1",
    ),
    "postgresql": (
        "SET LOCAL session_replication_role = replica",
        "SET LOCAL session_replication_role = DEFAULT",
    ),
}


def relaxation_statements(dialect_name: str):
    """
    Return the (relax, restore) statements for a dialect.

    Raises:
        UnsupportedDatabaseError: If the dialect has no known way to relax checks
    """
    try:
        return RELAXATION_STATEMENTS[dialect_name]
    except KeyError:
        raise UnsupportedDatabaseError(
            f"don't know how to relax foreign key checks on {dialect_name}"
        ) from None


@contextmanager
def relaxed_integrity(connection: Connection):
    """
    Relax foreign key checks for the body of the ``with`` block.

    Checks are restored on every exit path. If restoring fails while an
    error is already propagating, the restore failure is logged and the
    original error wins; the caller's rollback discards the transaction.
    """
    relax, restore = relaxation_statements(connection.dialect.name)
    connection.execute(text(relax))
    logger.debug(f"Foreign key checks relaxed ({relax})")
    try:
        yield connection
    except BaseException:
        try:
            connection.execute(text(restore))
        except SQLAlchemyError:
            logger.warning("Couldn't restore foreign key checks after failure", exc_info=True)
        raise
    connection.execute(text(restore))
    logger.debug(f"Foreign key checks restored ({restore})")
