from typing import Any, Dict, Optional


class AuthAPIError(Exception):
    """Base class for errors the API turns into responses"""


class RegistrationError(AuthAPIError):
    """
    A user could not be created.

    `errors` maps each offending field to a detail dict:
    {"message": ..., "kind": ..., "path": <field>, "value": ...}
    """

    def __init__(self, message: str = "Could not create user", errors: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class UniquenessError(RegistrationError):
    """Name or email is already registered"""


class NotAuthenticatedError(AuthAPIError):
    """Missing or unknown bearer token on a protected route"""


def field_error(path: str, kind: str, message: str, value: Any = None) -> Dict[str, Any]:
    """Build one entry of a RegistrationError's errors dict"""
    return {"message": message, "kind": kind, "path": path, "value": value}
