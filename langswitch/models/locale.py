"""
Locale models.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, LargeBinary, String as SAString
import uuid

if TYPE_CHECKING:
    from langswitch.models.language import Language


class Locale(SQLModel, table=True):
    """Locale table - read-only reference data such as 'de-DE' or 'en-GB'."""
    __tablename__ = "locale"
    
    id: bytes = Field(
        default_factory=lambda: uuid.uuid4().bytes,
        sa_column=Column(LargeBinary(16), primary_key=True)
    )
    code: str = Field(sa_column=Column(SAString(255), nullable=False, unique=True))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    
    # Relationships
    translations: List["LocaleTranslation"] = Relationship(back_populates="locale")
    
    def get_name(self, language_id: bytes) -> str:
        """
        Display name of the locale as seen from ``language_id``.
        
        Falls back to the first translated name, then to the code.
        """
        fallback = None
        for translation in self.translations:
            if translation.language_id == language_id and translation.name:
                return translation.name
            if fallback is None and translation.name:
                fallback = translation.name
        return fallback or self.code


class LocaleTranslation(SQLModel, table=True):
    """Translated locale names, one row per (locale, language)."""
    __tablename__ = "locale_translation"
    
    locale_id: bytes = Field(
        sa_column=Column(LargeBinary(16), ForeignKey("locale.id"), primary_key=True)
    )
    language_id: bytes = Field(
        sa_column=Column(LargeBinary(16), ForeignKey("language.id"), primary_key=True)
    )
    name: Optional[str] = None  # e.g. 'German'
    territory: Optional[str] = None  # e.g. 'Germany'
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    
    # Relationships
    locale: "Locale" = Relationship(back_populates="translations")
    language: "Language" = Relationship()
