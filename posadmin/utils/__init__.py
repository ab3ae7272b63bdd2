from .helpers import (
    serialize_doc,
    success_response,
    error_response,
)
from .logger import Logger
from .exceptions import (
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
    DuplicateError,
    ServiceUnavailableError,
)

__all__ = [
    "serialize_doc",
    "success_response",
    "error_response",
    "Logger",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
    "DuplicateError",
    "ServiceUnavailableError",
]
