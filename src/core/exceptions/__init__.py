from src.core.exceptions.base import (
    AppException,
    NotFoundError,
    TenantNotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    DuplicateError,
    PdfGenerationUnavailableError,
)

__all__ = [
    "AppException",
    "NotFoundError",
    "TenantNotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "DuplicateError",
    "PdfGenerationUnavailableError",
]
