"""
Repair default-language rows of one translation table after a rotation.

Two passes per table:

1. Promote: every entity without a row tagged with the default identity
   gets one of its existing rows re-tagged to the default identity. The
   row of the former default language is preferred, otherwise the row
   with the lowest language identity.
2. Backfill: every null content column of a default-tagged row takes the
   value of the former default language's row for the same entity.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from sqlalchemy import and_, case, column, exists, func, or_, select, table, update
from sqlalchemy.engine import Connection

from langswitch.services.schema_discovery import TranslationTable

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationResult:
    """Rows touched in one translation table."""
    table: str
    promoted: int = 0
    backfilled: int = 0


class DefaultRowReconciler:
    """
    Reconciles the default rows of a single translation table.

    Args:
        descriptor: The table to reconcile
        default_language_id: The system default identity
        former_default_id: Identity now held by the former default language
    """

    def __init__(self, descriptor: TranslationTable, default_language_id: bytes, former_default_id: bytes):
        self.descriptor = descriptor
        self.default_language_id = default_language_id
        self.former_default_id = former_default_id

        columns = (descriptor.language_column,) + descriptor.key_columns + descriptor.content_columns
        self.table = table(descriptor.name, *[column(name) for name in columns])

    @property
    def language(self):
        return self.table.c[self.descriptor.language_column]

    def _key_matches(self, left, right):
        return and_(*[left.c[name] == right.c[name] for name in self.descriptor.key_columns])

    def find_promotion_candidates(self, connection: Connection) -> List[Dict]:
        """
        Pick one row per entity that has no default-tagged row.

        Returns:
            One dict per entity with its key columns and the language
            identity of the row to promote
        """
        siblings = self.table.alias("sibling")
        has_default = exists().where(
            self._key_matches(siblings, self.table),
            siblings.c[self.descriptor.language_column] == self.default_language_id,
        )
        preference = case((self.language == self.former_default_id, 0), else_=1)
        key_columns = [self.table.c[name] for name in self.descriptor.key_columns]
        statement = (
            select(*key_columns, self.language)
            .where(~has_default)
            .order_by(*key_columns, preference, self.language)
        )

        candidates = {}
        for row in connection.execute(statement).mappings():
            key: Tuple = tuple(row[name] for name in self.descriptor.key_columns)
            if key not in candidates:
                candidates[key] = dict(row)
        return list(candidates.values())

    def promote_missing_defaults(self, connection: Connection) -> int:
        """Re-tag one row to the default identity for every entity lacking one."""
        promoted = 0
        for candidate in self.find_promotion_candidates(connection):
            conditions = [self.table.c[name] == candidate[name] for name in self.descriptor.key_columns]
            conditions.append(self.language == candidate[self.descriptor.language_column])
            result = connection.execute(
                update(self.table)
                .where(and_(*conditions))
                .values({self.descriptor.language_column: self.default_language_id})
            )
            promoted += result.rowcount
        if promoted:
            logger.info(f"{self.descriptor.name}: promoted {promoted} row(s) to the default language")
        return promoted

    def backfill_from_former_default(self, connection: Connection) -> int:
        """Fill null content of default rows from the former default language's rows."""
        if not self.descriptor.content_columns:
            return 0

        fallback = self.table.alias("fallback")
        values = {
            name: func.coalesce(self.table.c[name], fallback.c[name])
            for name in self.descriptor.content_columns
        }
        any_null = [self.table.c[name].is_(None) for name in self.descriptor.content_columns]
        statement = (
            update(self.table)
            .where(
                self._key_matches(self.table, fallback),
                self.language == self.default_language_id,
                fallback.c[self.descriptor.language_column] == self.former_default_id,
            )
            .where(or_(*any_null))
            .values(values)
        )
        backfilled = connection.execute(statement).rowcount
        if backfilled:
            logger.info(f"{self.descriptor.name}: backfilled {backfilled} default row(s)")
        return backfilled

    def reconcile(self, connection: Connection) -> ReconciliationResult:
        result = ReconciliationResult(self.descriptor.name)
        result.promoted = self.promote_missing_defaults(connection)
        result.backfilled = self.backfill_from_former_default(connection)
        return result