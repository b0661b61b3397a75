"""
Models package - imports all models so they register with SQLModel.
"""
from langswitch.models.locale import Locale, LocaleTranslation
from langswitch.models.language import Language

__all__ = [
    'Locale',
    'LocaleTranslation',
    'Language',
]
