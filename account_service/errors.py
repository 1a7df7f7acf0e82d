"""
Error taxonomy for the account service.

Everything deriving from AccountError is turned into the JSON envelope by the
exception handlers in main.py. ConfigurationError sits outside that hierarchy:
it is raised while building the app and stops the process.
"""
from typing import Optional


class ConfigurationError(RuntimeError):
    """Raised when the service cannot be configured safely (e.g. no JWT secret)."""


class AccountError(Exception):
    status_code = 400

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error


class InvalidInputError(AccountError):
    status_code = 400


class ConflictError(AccountError):
    status_code = 400


class UnauthenticatedError(AccountError):
    status_code = 401


class NotFoundError(AccountError):
    status_code = 404


class StoreError(AccountError):
    status_code = 400
