"""
Core Exceptions
================

Custom exceptions for the application.

These exceptions define domain-specific errors that are raised by services
and repositories and translated to HTTP responses at the API boundary.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class RepositoryException(ApplicationException):
    """Unexpected storage or runtime failure while serving a request."""


class ValidationException(ApplicationException):
    """Exception for validation errors."""

    status_code = 400


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    status_code = 404

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        details = dict(details or {})
        if resource_id is not None:
            details.setdefault("resource_id", resource_id)
        super().__init__(f"{resource_type} not found", details)


class DatabaseUnavailableException(ApplicationException):
    """Raised when the database is not (or could not be made) ready."""

    status_code = 503

    def __init__(self, message: str = "Database not ready", details: Optional[dict] = None):
        super().__init__(message, details)
