"""
Custom exceptions for langswitch.
"""


class LanguageSwitchException(Exception):
    """Base exception for all langswitch exceptions."""
    pass


class ValidationError(LanguageSwitchException):
    """Raised when validation fails."""
    pass


class NotFoundError(LanguageSwitchException):
    """Raised when a requested resource is not found."""
    pass


class UnsupportedDatabaseError(LanguageSwitchException):
    """Raised when the database offers no way to relax foreign key checks."""
    pass


class DefaultLanguageSwapError(LanguageSwitchException):
    """Raised when the swap failed and its transaction was rolled back."""
    
    def __init__(self, message: str, step: str = None):
        super().__init__(message)
        self.step = step


class TransactionStartError(DefaultLanguageSwapError):
    """Raised when the swap transaction could not be opened."""
    pass
