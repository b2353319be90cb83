"""Custom exceptions for Recipe Finder Core.

Each exception maps to one HTTP status in the error handlers registered
by main.py:
- ValidationError      -> 400
- AuthenticationError  -> 401
- Forbidden            -> 403
- ResourceNotFound     -> 404
- DatabaseError        -> 500 (via RecipeFinderError)
"""


class RecipeFinderError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(RecipeFinderError):
    """Request data failed validation."""


class AuthenticationError(RecipeFinderError):
    """No authenticated session is present."""


class Forbidden(RecipeFinderError):
    """Supplied credentials do not match."""


class ResourceNotFound(RecipeFinderError):
    """Requested record does not exist."""


class DatabaseError(RecipeFinderError):
    """Record store operation failed."""
