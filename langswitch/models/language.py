"""
Language model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, LargeBinary
import uuid

if TYPE_CHECKING:
    from langswitch.models.locale import Locale


class Language(SQLModel, table=True):
    """
    Language table.
    
    Exactly one row carries the system default identity. Every
    ``*_translation`` table references ``language.id``.
    """
    __tablename__ = "language"
    
    id: bytes = Field(
        default_factory=lambda: uuid.uuid4().bytes,
        sa_column=Column(LargeBinary(16), primary_key=True)
    )
    parent_id: Optional[bytes] = Field(
        default=None,
        sa_column=Column(LargeBinary(16), ForeignKey("language.id"), nullable=True)
    )
    locale_id: bytes = Field(
        sa_column=Column(LargeBinary(16), ForeignKey("locale.id"), nullable=False)
    )
    translation_code_id: Optional[bytes] = Field(
        default=None,
        sa_column=Column(LargeBinary(16), ForeignKey("locale.id"), nullable=True)
    )
    name: str
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    
    # Relationships
    locale: Optional["Locale"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Language.locale_id]"}
    )
