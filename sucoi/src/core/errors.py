"""
Sucoi - Domain Errors
======================
Exceptions raised by the service layer for client-side failures.  The
application factory maps every ``SucoiError`` to a JSON response of the
form ``{"error": message}`` with the subclass's ``status_code``.
"""

from __future__ import annotations


class SucoiError(Exception):
    """Base class for errors that are the caller's fault."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConflictError(SucoiError):
    status_code = 400


class UnauthorizedError(SucoiError):
    status_code = 401


class NotFoundError(SucoiError):
    status_code = 404


class DatabaseConnectionError(RuntimeError):
    """Raised when the MongoDB server cannot be reached at startup."""
