"""
Utility modules for the Landlord API.
"""

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ConflictError,
    BadRequestError,
    InternalServerError,
    DatabaseConnectionError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    DuplicateEmailError
)

# Auth helpers and dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ConflictError",
    "BadRequestError",
    "InternalServerError",
    "DatabaseConnectionError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "DuplicateEmailError",
]
