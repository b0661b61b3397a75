"""
Swap two unique identities through a scratch value.

Exchanging two primary keys directly would collide on the unique key,
so the swap runs as three ordered updates:

1. a -> scratch
2. b -> a
3. scratch -> b

Every dependent foreign key column is re-tagged the same way, right
before the identity row itself, so the result is the same whether or not
the database cascades key updates.
"""
import logging
import uuid
from typing import Callable, Optional, Sequence

from sqlalchemy import column, select, table, update
from sqlalchemy.engine import Connection

from langswitch.services.schema_discovery import LanguageReference

logger = logging.getLogger(__name__)

ROTATION_STEPS = 3


def new_identity() -> bytes:
    """A random 16 byte identity."""
    return uuid.uuid4().bytes


def _identity_in_use(connection: Connection, table_name: str, column_name: str, value: bytes) -> bool:
    identities = table(table_name, column(column_name))
    statement = select(identities.c[column_name]).where(identities.c[column_name] == value).limit(1)
    return connection.execute(statement).first() is not None


def generate_scratch_identity(
    connection: Connection,
    table_name: str,
    column_name: str,
    factory: Callable[[], bytes] = new_identity,
) -> bytes:
    """Draw identities from ``factory`` until one is unused in the table."""
    scratch = factory()
    while _identity_in_use(connection, table_name, column_name, scratch):
        logger.debug("Scratch identity already taken, drawing another")
        scratch = factory()
    return scratch


def _retag(connection: Connection, table_name: str, column_name: str, old: bytes, new: bytes) -> int:
    target = table(table_name, column(column_name))
    result = connection.execute(
        update(target).where(target.c[column_name] == old).values({column_name: new})
    )
    return result.rowcount


def rotate_identity(
    connection: Connection,
    id_a: bytes,
    id_b: bytes,
    table_name: str = "language",
    column_name: str = "id",
    dependents: Sequence[LanguageReference] = (),
    scratch_factory: Callable[[], bytes] = new_identity,
    on_step: Optional[Callable[[], None]] = None,
) -> bytes:
    """
    Make the row holding ``id_a`` hold ``id_b`` and vice versa.

    Args:
        connection: Connection with an open transaction
        id_a: Identity of the first row (e.g. the system default identity)
        id_b: Identity of the second row
        table_name: Table holding the identities
        column_name: Identity column
        dependents: Foreign key columns to re-tag along with the identities
        scratch_factory: Source of candidate scratch identities
        on_step: Called after each of the three steps

    Returns:
        The scratch identity used for the rotation
    """
    scratch = generate_scratch_identity(connection, table_name, column_name, scratch_factory)
    steps = ((id_a, scratch), (id_b, id_a), (scratch, id_b))

    for number, (old, new) in enumerate(steps, start=1):
        for reference in dependents:
            moved = _retag(connection, reference.table, reference.column, old, new)
            if moved:
                logger.debug(f"Step {number}: re-tagged {moved} row(s) in {reference.table}.{reference.column}")
        rows = _retag(connection, table_name, column_name, old, new)
        logger.debug(f"Step {number}: updated {rows} row(s) in {table_name}")
        if on_step:
            on_step()

    logger.info(f"Rotated identities {id_a.hex()} and {id_b.hex()} in {table_name}")
    return scratch
