"""
Find every table that references the language identity.

The set of translation tables grows with the schema, so it is read from
the database catalog on every run instead of being listed in code.
"""
import fnmatch
import logging
from dataclasses import dataclass
from typing import List, Tuple

from sqlalchemy import inspect
from sqlalchemy.engine import Connection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageReference:
    """A single-column foreign key pointing at the language identity."""
    table: str
    column: str


@dataclass(frozen=True)
class TranslationTable:
    """
    A table keyed by (key_columns..., language_column).

    ``content_columns`` are all remaining columns, the ones that get
    backfilled from the former default language.
    """
    name: str
    language_column: str
    key_columns: Tuple[str, ...]
    content_columns: Tuple[str, ...]


def find_language_references(
    connection: Connection,
    language_table: str = "language",
    language_column: str = "id",
) -> List[LanguageReference]:
    """
    List every single-column foreign key that references
    ``language_table.language_column``, ordered by table and column.

    Composite foreign keys that include the language column are skipped.
    """
    inspector = inspect(connection)
    references = []
    for table_name in inspector.get_table_names():
        for foreign_key in inspector.get_foreign_keys(table_name):
            if foreign_key["referred_table"] != language_table:
                continue
            if foreign_key["referred_columns"] != [language_column]:
                continue
            if len(foreign_key["constrained_columns"]) != 1:
                logger.warning(
                    f"Skipping composite foreign key {foreign_key.get('name')} on {table_name}"
                )
                continue
            references.append(LanguageReference(table_name, foreign_key["constrained_columns"][0]))

    references = sorted(set(references), key=lambda r: (r.table, r.column))
    logger.debug(f"Found {len(references)} column(s) referencing {language_table}.{language_column}")
    return references


def discover_translation_tables(
    connection: Connection,
    language_table: str = "language",
    language_column: str = "id",
    table_pattern: str = "*_translation",
) -> List[TranslationTable]:
    """
    Find the translation tables whose default rows need reconciling.

    A table qualifies when its name matches ``table_pattern``, it has a
    foreign key to the language identity, and that column is part of a
    composite primary key with at least one other column.
    """
    inspector = inspect(connection)
    tables = []
    for reference in find_language_references(connection, language_table, language_column):
        if not fnmatch.fnmatchcase(reference.table, table_pattern):
            continue

        primary_key = inspector.get_pk_constraint(reference.table).get("constrained_columns") or []
        if reference.column not in primary_key:
            continue
        key_columns = tuple(column for column in primary_key if column != reference.column)
        if not key_columns:
            continue

        content_columns = tuple(
            column["name"]
            for column in inspector.get_columns(reference.table)
            if column["name"] not in primary_key
        )
        tables.append(TranslationTable(reference.table, reference.column, key_columns, content_columns))
        logger.debug(f"Translation table {reference.table}: keys {key_columns}, language column {reference.column}")

    logger.info(f"Discovered {len(tables)} translation table(s)")
    return tables
