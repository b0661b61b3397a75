"""
Change which locale holds the system default language identity.

The swap runs as one transaction:

1. rotate the identities of the current default and the target language
2. discover the translation tables from the database catalog
3. reconcile the default rows of every translation table

Any failure rolls the whole transaction back.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Type

from sqlalchemy.engine import Engine
from sqlmodel import Session

from langswitch.core.exceptions import (
    DefaultLanguageSwapError,
    NotFoundError,
    TransactionStartError,
    ValidationError,
)
from langswitch.services import identity_rotation, schema_discovery
from langswitch.services.integrity import relaxation_statements, relaxed_integrity
from langswitch.services.locale_service import LocaleService
from langswitch.services.reconciliation import DefaultRowReconciler, ReconciliationResult

logger = logging.getLogger(__name__)


class SwapProgress:
    """Progress hooks; the default implementation reports nothing."""

    def start(self, label: str, total: int) -> None:
        pass

    def advance(self) -> None:
        pass

    def finish(self) -> None:
        pass


@dataclass
class SwapResult:
    """Outcome of a default language change."""
    changed: bool
    locale_code: str
    former_default_id: Optional[bytes] = None
    tables: List[ReconciliationResult] = field(default_factory=list)


class DefaultLanguageService:
    """
    Orchestrates a system default language change.

    Args:
        engine: Database engine
        default_language_id: The system default identity
        language_table: Table holding Language rows
        language_id_column: Identity column of that table
        translation_table_pattern: Glob selecting the tables to reconcile
        reconciler_class: Reconciler built per discovered table
    """

    def __init__(
        self,
        engine: Engine,
        default_language_id: bytes,
        language_table: str = "language",
        language_id_column: str = "id",
        translation_table_pattern: str = "*_translation",
        reconciler_class: Type[DefaultRowReconciler] = DefaultRowReconciler,
    ):
        if not default_language_id:
            raise ValidationError("default language id shouldn't be empty")
        self.engine = engine
        self.default_language_id = default_language_id
        self.language_table = language_table
        self.language_id_column = language_id_column
        self.translation_table_pattern = translation_table_pattern
        self.reconciler_class = reconciler_class

    def change_default_language(self, locale_code: str, progress: Optional[SwapProgress] = None) -> SwapResult:
        """
        Make the language of ``locale_code`` the system default language.

        Raises:
            ValidationError: If ``locale_code`` is empty
            NotFoundError: If the locale or the current default locale can't be found
            UnsupportedDatabaseError: If foreign key checks can't be relaxed
            DefaultLanguageSwapError: If the swap failed and was rolled back
        """
        if not locale_code or not locale_code.strip():
            raise ValidationError("argument locale shouldn't be empty")
        relaxation_statements(self.engine.dialect.name)

        with Session(self.engine) as session:
            locale_service = LocaleService(session, self.default_language_id)

            new_locale = locale_service.find_locale(locale_code)
            if new_locale is None:
                raise NotFoundError(f"{locale_code} isn't a valid locale code")

            current_default = locale_service.get_current_default_language()
            if current_default.locale_id == new_locale.id:
                logger.info(f"Nothing to do, {locale_code} is already the system default language")
                return SwapResult(changed=False, locale_code=locale_code)

            new_language_id = locale_service.get_or_create_language_id(new_locale)

        if new_language_id == self.default_language_id:
            logger.info(f"Nothing to do, {locale_code} already holds the default identity")
            return SwapResult(changed=False, locale_code=locale_code)

        tables = self.swap_default_language_id(new_language_id, progress or SwapProgress())
        logger.info(f"System default language changed to {locale_code}")
        return SwapResult(
            changed=True,
            locale_code=locale_code,
            former_default_id=new_language_id,
            tables=tables,
        )

    def swap_default_language_id(self, new_language_id: bytes, progress: SwapProgress) -> List[ReconciliationResult]:
        """
        Give ``new_language_id``'s row the default identity and repair all
        translation tables, atomically.

        After the swap the former default language holds ``new_language_id``.
        """
        connection = self.engine.connect()
        try:
            try:
                transaction = connection.begin()
            except Exception as e:
                raise TransactionStartError("couldn't start a transaction!", step="begin") from e

            step = "relax foreign key checks"
            try:
                with relaxed_integrity(connection):
                    step = "rotate identities"
                    references = schema_discovery.find_language_references(
                        connection, self.language_table, self.language_id_column
                    )
                    progress.start("switch default language", identity_rotation.ROTATION_STEPS)
                    identity_rotation.rotate_identity(
                        connection,
                        self.default_language_id,
                        new_language_id,
                        table_name=self.language_table,
                        column_name=self.language_id_column,
                        dependents=references,
                        on_step=progress.advance,
                    )
                    progress.finish()

                    step = "discover translation tables"
                    tables = schema_discovery.discover_translation_tables(
                        connection,
                        self.language_table,
                        self.language_id_column,
                        self.translation_table_pattern,
                    )

                    results = []
                    progress.start("refactor translation tables", len(tables))
                    for descriptor in tables:
                        step = f"reconcile {descriptor.name}"
                        reconciler = self.reconciler_class(descriptor, self.default_language_id, new_language_id)
                        results.append(reconciler.reconcile(connection))
                        progress.advance()
                    step = "restore foreign key checks"

                step = "commit"
                transaction.commit()
                progress.finish()
            except Exception as e:
                logger.error(f"Couldn't change system default language during '{step}', rolling back", exc_info=True)
                transaction.rollback()
                raise DefaultLanguageSwapError(
                    f"couldn't change system default language! ({step} failed)", step=step
                ) from e
        finally:
            connection.close()

        logger.info(f"Committed default language swap across {len(results)} translation table(s)")
        return results
