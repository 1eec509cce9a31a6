# utils/exceptions.py

from typing import Optional, Dict, Any
from http import HTTPStatus
from .logger import logger

class AppException(Exception):
    """Base exception class for all application exceptions"""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.details = details
        self.context = context or {}

        if status_code:
            self.status_code = status_code
        if error_code:
            self.error_code = error_code

        self._log_exception()
        super().__init__(self.message)

    def _log_exception(self):
        """Log exception with context"""
        log_message = f"{self.__class__.__name__}: {self.message}"
        if self.details:
            log_message += f" | Details: {self.details}"

        logger.error(
            log_message,
            extra={
                'error_code': self.error_code,
                'status_code': int(self.status_code),
                'context': self.context
            }
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            'error': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'details': self.details,
            'status_code': int(self.status_code),
            'context': self.context
        }

# Validation Exceptions
class ValidationError(AppException):
    """Data validation errors"""
    status_code = HTTPStatus.BAD_REQUEST
    error_code = "VALIDATION_ERROR"

# Database Exceptions
class DatabaseError(AppException):
    """Database related errors"""
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    error_code = "DB_ERROR"

# Business Logic Exceptions
class BusinessError(AppException):
    """Business logic related errors"""
    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    error_code = "BUSINESS_ERROR"

class ResourceNotFound(BusinessError):
    """Resource not found errors"""
    status_code = HTTPStatus.NOT_FOUND
    error_code = "RESOURCE_NOT_FOUND"

class ConverterNotFoundError(ResourceNotFound):
    """No registered converter supports the migration context"""
    error_code = "CONVERTER_NOT_FOUND"

__all__ = [
    'AppException',
    'ValidationError',
    'DatabaseError',
    'BusinessError',
    'ResourceNotFound',
    'ConverterNotFoundError',
]
