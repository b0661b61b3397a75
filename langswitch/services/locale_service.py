"""
Locale and language lookups for changing the system default language.
"""
import logging
from typing import Dict, List, Optional

from sqlmodel import Session

from langswitch.core.exceptions import NotFoundError
from langswitch.models import Language, Locale
from langswitch.services.repository import Criteria, EntityRepository

logger = logging.getLogger(__name__)


class LocaleService:
    """Resolves locale codes to locales and languages, creating languages on demand."""

    def __init__(self, session: Session, default_language_id: bytes):
        self.default_language_id = default_language_id
        self.locale_repository = EntityRepository(session, Locale)
        self.language_repository = EntityRepository(session, Language)

    def find_locale(self, locale_code: str) -> Optional[Locale]:
        """Look up a locale by its exact code, with translations loaded."""
        return self.locale_repository.first(
            Criteria()
            .add_filter("code", locale_code)
            .add_association("translations")
        )

    def get_current_default_language(self) -> Language:
        """
        Return the language holding the system default identity.
        
        Raises:
            NotFoundError: If no language or no locale is bound to the default identity
        """
        language = self.language_repository.first(
            Criteria(ids=[self.default_language_id]).add_association("locale")
        )
        if language is None:
            raise NotFoundError("couldn't find current default language")
        if language.locale is None:
            raise NotFoundError("couldn't find current locale")
        return language

    def find_language_id(self, locale: Locale) -> Optional[bytes]:
        """Return the id of the first language bound to ``locale``, if any."""
        ids = self.language_repository.search_ids(
            Criteria()
            .add_filter("locale_id", locale.id)
            .add_sorting("created_at")
        )
        return ids[0] if ids else None

    def create_language(self, locale: Locale) -> bytes:
        """Create a language for ``locale`` named after it, and return its id."""
        ids = self.language_repository.create([{
            "locale_id": locale.id,
            "translation_code_id": locale.id,
            "name": locale.get_name(self.default_language_id),
        }])
        logger.info(f"Created language for locale {locale.code}")
        return ids[0]

    def get_or_create_language_id(self, locale: Locale) -> bytes:
        language_id = self.find_language_id(locale)
        if language_id is None:
            language_id = self.create_language(locale)
        return language_id

    def get_locale_choices(self) -> Dict[str, List[str]]:
        """
        Group locale codes by display name for the interactive picker.
        
        Returns:
            Mapping of locale name to its codes, ordered by name then code
        """
        locales = self.locale_repository.search(
            Criteria().add_association("translations")
        )
        choices: Dict[str, List[str]] = {}
        for locale in sorted(locales, key=lambda l: (l.get_name(self.default_language_id), l.code)):
            choices.setdefault(locale.get_name(self.default_language_id), []).append(locale.code)
        return choices
