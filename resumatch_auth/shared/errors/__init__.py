
from .base import AppError, DomainError, InfrastructureError, ValidationError
from .http import handle_app_error, register_error_handler
from .validation import InvalidRequestBodyError, raise_validation_error

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "InvalidRequestBodyError",
    "ValidationError",
    "handle_app_error",
    "raise_validation_error",
    "register_error_handler",
]
