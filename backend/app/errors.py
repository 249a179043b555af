"""Domain error taxonomy.

Every error carries the HTTP status it maps to, so routes raise these and
the handlers registered in main.py turn them into ``{"message": ...}`` bodies.
"""


class AppError(Exception):
    """Base class for errors that cross the HTTP boundary."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400


class AuthError(AppError):
    """Bad credentials or missing session."""

    status_code = 401


class NotFoundError(AppError):
    """Referenced entity does not exist."""

    status_code = 404


class ConflictError(AppError):
    """Entity already exists (duplicate username)."""

    status_code = 400


class GenerationError(AppError):
    """Upstream text-generation call failed; safe to retry."""

    status_code = 500


class StorageError(AppError):
    """Store operation failed unexpectedly."""

    status_code = 500
